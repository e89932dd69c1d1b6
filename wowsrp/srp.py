"""
wowsrp/srp.py
-------
SRP-6 math for the game authentication protocol.

Implements:
- x, verifier and public key derivations
- Client and server computation of the shared secret S
- SHA interleave of S into the 40 byte session key K
- Client proof (M1), server proof (M2), reconnect and world server proofs

Every function is pure: buffers in, buffers out. Arithmetic operands are read
most significant byte first; hash inputs use the reversed buffers, which is
the layout the peer puts on the wire.
"""

from wowsrp.params import ProtocolParameters
from wowsrp.hashing import digest
from wowsrp.errors import MalformedInputError
from wowsrp.byte_order import (
    reverse,
    import_msb_first,
    import_reversed_lsw_first,
    export_msb_first,
    export_lsw_first
)
from wowsrp.constants import (
    SALT_LEN,
    CLIENT_PRIVATE_KEY_LEN,
    SERVER_PRIVATE_KEY_LENS,
    RECONNECT_DATA_LEN,
    WORLD_SEED_LEN,
    CREDENTIAL_SEPARATOR,
    WORLD_PROOF_PADDING
)
import logging


logger = logging.getLogger(__name__)


def _buffer(operation: str, name: str, value, *lengths: int) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        logger.warning("%s rejected %s: expected bytes, got %s", operation, name, type(value).__name__)
        raise MalformedInputError(f"{name} must be bytes, not {type(value).__name__}")

    if len(value) not in lengths:
        logger.warning("%s rejected %s: expected %s bytes, got %d", operation, name, lengths, len(value))
        raise MalformedInputError(f"{name} must be {' or '.join(map(str, lengths))} bytes long ({len(value)})")

    return bytes(value)


def _text(operation: str, name: str, value) -> bytes:
    if not isinstance(value, str):
        logger.warning("%s rejected %s: expected a string", operation, name)
        raise MalformedInputError(f"{name} must be a string, not {type(value).__name__}")

    if not value.isascii():
        logger.warning("%s rejected %s: not ASCII", operation, name)
        raise MalformedInputError(f"{name} must be ASCII")

    return value.encode("ascii")


class SRP6:
    """
    Stateless SRP-6 engine bound to one set of protocol parameters.

    The instance holds nothing but the immutable parameters, so a single
    engine can be shared between any number of threads.
    """

    def __init__(self, params: ProtocolParameters = None):
        self.params = params if params is not None else ProtocolParameters()

        logger.debug(
            "SRP6 engine ready: %d bit modulus, g=%d, k=%d, hash=%s",
            self.params.N.bit_length(),
            self.params.g,
            self.params.k,
            self.params.hash_name
        )

    def hash(self, *parts: bytes) -> bytes:
        return digest(self.params.hash_name, *parts)

    def _export(self, value: int) -> bytes:
        return export_msb_first(value, self.params.key_length)

    def calculate_x(self, username: str, password: str, salt: bytes) -> bytes:
        """
        x = H(salt | H(USERNAME | ":" | PASSWORD))

        Args:
            username: ASCII account name, upper cased before hashing.
            password: ASCII password, upper cased before hashing.
            salt: 32 byte account salt.

        Returns:
            20 byte x.
        """
        username = _text("calculate_x", "username", username).upper()
        password = _text("calculate_x", "password", password).upper()
        salt = _buffer("calculate_x", "salt", salt, SALT_LEN)

        interim = self.hash(username + CREDENTIAL_SEPARATOR + password)

        return reverse(self.hash(reverse(salt) + interim))

    def calculate_password_verifier(self, username: str, password: str, salt: bytes) -> bytes:
        """
        v = g^x % N

        Args:
            username: ASCII account name.
            password: ASCII password.
            salt: 32 byte account salt.

        Returns:
            32 byte verifier, stored by the server instead of the password.
        """
        x = import_msb_first(self.calculate_x(username, password, salt))

        return self._export(pow(self.params.g, x, self.params.N))

    def calculate_server_public_key(self, verifier: bytes, server_private_key: bytes) -> bytes:
        """
        B = (k * v + (g^b % N)) % N

        Args:
            verifier: 32 byte password verifier.
            server_private_key: 19 or 32 byte random exponent b.

        Returns:
            32 byte B.
        """
        p = self.params
        v = import_msb_first(_buffer("calculate_server_public_key", "verifier", verifier, p.key_length))
        b = import_msb_first(_buffer("calculate_server_public_key", "server_private_key", server_private_key, *SERVER_PRIVATE_KEY_LENS))

        return self._export((p.k * v + pow(p.g, b, p.N)) % p.N)

    def calculate_client_public_key(self, client_private_key: bytes) -> bytes:
        """
        A = g^a % N

        Args:
            client_private_key: 32 byte random exponent a.

        Returns:
            32 byte A.
        """
        a = _buffer("calculate_client_public_key", "client_private_key", client_private_key, CLIENT_PRIVATE_KEY_LEN)
        a = import_reversed_lsw_first(a)

        return self._export(pow(self.params.g, a, self.params.N))

    def calculate_client_s_key(self, client_private_key: bytes, server_public_key: bytes, x: bytes, u: bytes) -> bytes:
        """
        S = (B - (k * (g^x % N)))^(a + u * x) % N

        Args:
            client_private_key: 32 byte a.
            server_public_key: 32 byte B.
            x: 20 byte x from `calculate_x`.
            u: 20 byte scrambler from `calculate_u`.

        Returns:
            32 byte shared secret S.
        """
        p = self.params
        a = import_msb_first(_buffer("calculate_client_s_key", "client_private_key", client_private_key, CLIENT_PRIVATE_KEY_LEN))
        B = import_msb_first(_buffer("calculate_client_s_key", "server_public_key", server_public_key, p.key_length))
        x = import_msb_first(_buffer("calculate_client_s_key", "x", x, p.digest_size))
        u = import_msb_first(_buffer("calculate_client_s_key", "u", u, p.digest_size))

        # B - k * g^x goes negative whenever k * g^x > B
        base = (B - p.k * pow(p.g, x, p.N)) % p.N

        return self._export(pow(base, a + u * x, p.N))

    def calculate_server_s_key(self, client_public_key: bytes, verifier: bytes, u: bytes, server_private_key: bytes) -> bytes:
        """
        S = (A * (v^u % N))^b % N

        Args:
            client_public_key: 32 byte A.
            verifier: 32 byte v.
            u: 20 byte scrambler.
            server_private_key: 19 or 32 byte b.

        Returns:
            32 byte shared secret S.
        """
        p = self.params
        A = import_msb_first(_buffer("calculate_server_s_key", "client_public_key", client_public_key, p.key_length))
        v = import_msb_first(_buffer("calculate_server_s_key", "verifier", verifier, p.key_length))
        u = import_msb_first(_buffer("calculate_server_s_key", "u", u, p.digest_size))
        b = import_msb_first(_buffer("calculate_server_s_key", "server_private_key", server_private_key, *SERVER_PRIVATE_KEY_LENS))

        return self._export(pow(A * pow(v, u, p.N), b, p.N))

    def calculate_u(self, client_public_key: bytes, server_public_key: bytes) -> bytes:
        """u = H(A | B)"""
        A = _buffer("calculate_u", "client_public_key", client_public_key, self.params.key_length)
        B = _buffer("calculate_u", "server_public_key", server_public_key, self.params.key_length)

        return reverse(self.hash(reverse(A) + reverse(B)))

    def calculate_interleaved(self, s_key: bytes) -> bytes:
        """
        K = SHA_Interleave(S)

        The reversed S is trimmed to the first byte that is non-zero AND
        leaves an even number of bytes, so both halves keep the same length.
        The even and odd bytes are hashed separately and the two digests are
        woven back together.

        Args:
            s_key: 32 byte shared secret.

        Returns:
            40 byte session key.
        """
        s = reverse(_buffer("calculate_interleaved", "s_key", s_key, self.params.key_length))
        length = len(s)

        for i in range(length):
            if s[i] != 0 and (length - i) % 2 == 0:
                s = s[i:]
                break

        G = self.hash(s[0::2])
        H = self.hash(s[1::2])

        K = bytearray(self.params.session_key_length)
        K[0::2] = G
        K[1::2] = H

        return reverse(K)

    def calculate_client_proof(self, username: str, session_key: bytes, client_public_key: bytes, server_public_key: bytes, salt: bytes) -> bytes:
        """
        M1 = H(X | H(USERNAME) | s | A | B | K)

        Args:
            username: ASCII account name, upper cased before hashing.
            session_key: 40 byte K.
            client_public_key: 32 byte A.
            server_public_key: 32 byte B.
            salt: 32 byte account salt.

        Returns:
            20 byte M1.
        """
        p = self.params
        username = _text("calculate_client_proof", "username", username).upper()
        K = _buffer("calculate_client_proof", "session_key", session_key, p.session_key_length)
        A = _buffer("calculate_client_proof", "client_public_key", client_public_key, p.key_length)
        B = _buffer("calculate_client_proof", "server_public_key", server_public_key, p.key_length)
        s = _buffer("calculate_client_proof", "salt", salt, SALT_LEN)

        X = export_lsw_first(p.client_proof_constant, p.digest_size)

        M1 = self.hash(X, self.hash(username), reverse(s), reverse(A), reverse(B), reverse(K))

        return reverse(M1)

    def calculate_server_proof(self, client_public_key: bytes, client_proof: bytes, session_key: bytes) -> bytes:
        """M2 = H(A | M1 | K)"""
        p = self.params
        A = _buffer("calculate_server_proof", "client_public_key", client_public_key, p.key_length)
        M1 = _buffer("calculate_server_proof", "client_proof", client_proof, p.digest_size)
        K = _buffer("calculate_server_proof", "session_key", session_key, p.session_key_length)

        return reverse(self.hash(reverse(A), reverse(M1), reverse(K)))

    def calculate_reconnect_proof(self, username: str, client_data: bytes, server_data: bytes, session_key: bytes) -> bytes:
        """
        H(username | client_data | server_data | K)

        The username is hashed exactly as given, without case folding.

        Args:
            username: ASCII account name.
            client_data: 16 byte client challenge data.
            server_data: 16 byte server challenge data.
            session_key: 40 byte K from the previous login.

        Returns:
            20 byte reconnect proof.
        """
        username = _text("calculate_reconnect_proof", "username", username)
        client_data = _buffer("calculate_reconnect_proof", "client_data", client_data, RECONNECT_DATA_LEN)
        server_data = _buffer("calculate_reconnect_proof", "server_data", server_data, RECONNECT_DATA_LEN)
        K = _buffer("calculate_reconnect_proof", "session_key", session_key, self.params.session_key_length)

        return reverse(self.hash(username, reverse(client_data), reverse(server_data), reverse(K)))

    def calculate_world_server_proof(self, username: str, client_seed: bytes, server_seed: bytes, session_key: bytes) -> bytes:
        """
        H(username | 0 | client_seed | server_seed | K)

        Unlike the other proofs the seeds go into the hash untouched and the
        digest is returned as is.

        Args:
            username: ASCII account name.
            client_seed: 4 byte client seed.
            server_seed: 4 byte server seed.
            session_key: 40 byte K.

        Returns:
            20 byte world server proof.
        """
        username = _text("calculate_world_server_proof", "username", username)
        client_seed = _buffer("calculate_world_server_proof", "client_seed", client_seed, WORLD_SEED_LEN)
        server_seed = _buffer("calculate_world_server_proof", "server_seed", server_seed, WORLD_SEED_LEN)
        K = _buffer("calculate_world_server_proof", "session_key", session_key, self.params.session_key_length)

        return self.hash(username, WORLD_PROOF_PADDING, client_seed, server_seed, reverse(K))
