"""
wowsrp/params.py
-------
Immutable protocol parameters shared by both peers.

Both sides must be configured with identical values: any difference makes
every derivation diverge without a local error.
"""

from dataclasses import dataclass, field
from wowsrp.hashing import digest_size
from wowsrp.errors import DegenerateInputError
from wowsrp.constants import (
    SRP_N_HEX,
    SRP_G,
    SRP_K,
    SRP_HASH,
    CLIENT_PROOF_CONSTANT_HEX
)


@dataclass(frozen=True)
class ProtocolParameters:
    """
    Group, multiplier, hash and client proof constant of one protocol instance.

    Attributes:
        N: Safe prime modulus.
        g: Generator.
        k: Multiplier.
        client_proof_constant: Precomputed value mixed into M1.
        hash_name: hashlib name of the hash primitive.
    """
    N: int = int(SRP_N_HEX, 16)
    g: int = SRP_G
    k: int = SRP_K
    client_proof_constant: int = int(CLIENT_PROOF_CONSTANT_HEX, 16)
    hash_name: str = SRP_HASH

    digest_size: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.N <= 1:
            raise DegenerateInputError(f"Modulus must be greater than 1 ({self.N})")

        if not 1 <= self.g < self.N:
            raise DegenerateInputError(f"Generator is outside [1, N) ({self.g})")

        if not 1 <= self.k < self.N:
            raise DegenerateInputError(f"Multiplier is outside [1, N) ({self.k})")

        size = digest_size(self.hash_name)
        if size <= 0:
            raise DegenerateInputError(f"Hash {self.hash_name!r} has no fixed digest size")

        if self.client_proof_constant < 0 or self.client_proof_constant.bit_length() > size * 8:
            raise DegenerateInputError(f"Client proof constant does not fit in {size} bytes")

        object.__setattr__(self, "digest_size", size)

    @property
    def key_length(self) -> int:
        """Byte length of N, and of every value reduced modulo N."""
        return (self.N.bit_length() + 7) // 8

    @property
    def session_key_length(self) -> int:
        return self.digest_size * 2
