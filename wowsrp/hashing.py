"""
wowsrp/hashing.py
-------
Thin wrappers around hashlib for the single hash the protocol is built on.
"""

import hashlib
from wowsrp.errors import DegenerateInputError


def new_hash(hash_name: str):
    """
    Create a fresh hashlib object.

    Args:
        hash_name: Any algorithm name accepted by `hashlib.new`.

    Raises:
        DegenerateInputError: If hashlib does not know the algorithm.
    """
    try:
        return hashlib.new(hash_name)
    except (ValueError, TypeError) as e:
        raise DegenerateInputError(f"Unsupported hash algorithm ({hash_name!r})") from e


def digest(hash_name: str, *parts: bytes) -> bytes:
    """
    Hash the concatenation of `parts`.

    Args:
        hash_name: hashlib algorithm name.
        parts: Byte strings fed to the hash in order.

    Returns:
        The raw digest.
    """
    h = new_hash(hash_name)
    for part in parts:
        h.update(part)
    return h.digest()


def digest_size(hash_name: str) -> int:
    return new_hash(hash_name).digest_size
