"""
wowsrp/session_cipher.py
-------
Additive feedback XOR cipher keyed by the session key K.

encrypt / decrypt start from a fresh state on every call, so a logical
stream split over several calls will NOT line up with one encrypted in a
single call. Callers that need that use encrypt_stream / decrypt_stream and
carry the returned CipherState into the next call.
"""

from typing import NamedTuple, Tuple
from wowsrp.errors import DegenerateInputError, MalformedInputError


class CipherState(NamedTuple):
    """Position in the key and last ciphertext byte, between two stream calls."""
    index: int = 0
    last: int = 0


def _check(data, session_key, state: CipherState) -> CipherState:
    if not isinstance(data, (bytes, bytearray)) or not isinstance(session_key, (bytes, bytearray)):
        raise MalformedInputError("data and session_key must be bytes")

    if len(session_key) == 0:
        raise DegenerateInputError("Session key is empty")

    if state is None:
        return CipherState()

    index, last = state
    if not 0 <= index < len(session_key):
        raise MalformedInputError(f"Cipher state index is outside the session key ({index})")

    if not 0 <= last <= 0xFF:
        raise MalformedInputError(f"Cipher state last byte is not a byte value ({last})")

    return CipherState(index, last)


def encrypt_stream(data: bytes, session_key: bytes, state: CipherState = None) -> Tuple[bytes, CipherState]:
    """
    Encrypt `data`, continuing from `state`.

    E = (x ^ K[index]) + last

    Args:
        data: Plaintext bytes, may be empty.
        session_key: Non-empty key, normally the 40 byte K.
        state: State returned by the previous call, None to start over.

    Returns:
        (ciphertext, state) where state feeds the next call.
    """
    index, last = _check(data, session_key, state)

    key_length = len(session_key)
    result = bytearray(len(data))

    for i, plain_byte in enumerate(data):
        last = ((plain_byte ^ session_key[index]) + last) & 0xFF
        result[i] = last
        index = (index + 1) % key_length

    return bytes(result), CipherState(index, last)


def decrypt_stream(data: bytes, session_key: bytes, state: CipherState = None) -> Tuple[bytes, CipherState]:
    """
    Decrypt `data`, continuing from `state`.

    x = (E - last) ^ K[index], with last being the previous *ciphertext* byte.

    Args:
        data: Ciphertext bytes, may be empty.
        session_key: Non-empty key, normally the 40 byte K.
        state: State returned by the previous call, None to start over.

    Returns:
        (plaintext, state) where state feeds the next call.
    """
    index, last = _check(data, session_key, state)

    key_length = len(session_key)
    result = bytearray(len(data))

    for i, encrypted_byte in enumerate(data):
        result[i] = ((encrypted_byte - last) & 0xFF) ^ session_key[index]
        last = encrypted_byte
        index = (index + 1) % key_length

    return bytes(result), CipherState(index, last)


def encrypt(data: bytes, session_key: bytes) -> bytes:
    return encrypt_stream(data, session_key)[0]


def decrypt(data: bytes, session_key: bytes) -> bytes:
    return decrypt_stream(data, session_key)[0]
