import secrets
from enum import Enum
from functools import lru_cache
from typing import Optional

from claris_auth.core.exceptions import SRPProtocolError, SRPStateError
from claris_auth.core.hashing import derive_key, hash_string, hex_hash
from claris_auth.core.srp_math import N, g, hex_to_int, int_to_padded_bytes, mod_pow, pad_hex

SMALL_A_BYTES = 128 # 1024-bit client ephemeral secret


@lru_cache(maxsize=1)
def get_multiplier() -> int:
    # k = H(PAD(N) | PAD(g)), fixed for the process lifetime
    return hex_to_int(hex_hash(pad_hex(N) + pad_hex(g)))


def generate_small_a() -> int:
    return int.from_bytes(secrets.token_bytes(SMALL_A_BYTES), "big")


class SRPState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    KEY_DERIVED = "key_derived"


class AuthenticationHelper:
    """
    Client side of one Cognito USER_SRP_AUTH attempt.

    One instance serves exactly one handshake: init() -> get_large_a() ->
    get_password_authentication_key(). A failed attempt must start over with a
    new instance so that a fresh ephemeral secret is drawn.
    """

    def __init__(self, pool_name: str, small_a: Optional[int] = None):
        if not pool_name:
            raise ValueError("pool_name must be a non-empty string")
        self.pool_name = pool_name
        self._small_a = small_a # injectable for golden-vector tests only
        self._large_a: Optional[int] = None
        self._k: Optional[int] = None
        self.state = SRPState.UNINITIALIZED

    def init(self) -> None:
        if self.state != SRPState.UNINITIALIZED:
            raise SRPStateError("init() already called; use a new AuthenticationHelper per attempt")
        if self._small_a is None:
            self._small_a = generate_small_a()
        self._k = get_multiplier()
        self._large_a = mod_pow(g, self._small_a, N)
        self.state = SRPState.INITIALIZED

    def _require_initialized(self) -> None:
        if self.state == SRPState.UNINITIALIZED:
            raise SRPStateError("Must call init() first")

    def _require_active(self) -> None:
        # a is spent once the signing key has been derived
        self._require_initialized()
        if self.state == SRPState.KEY_DERIVED:
            raise SRPStateError("Signing key already derived for this attempt")

    def get_large_a(self) -> str:
        self._require_initialized()
        return pad_hex(self._large_a)

    def get_password_authentication_key(
        self,
        username: str,
        password: str,
        server_b_hex: str,
        salt_hex: str,
    ) -> bytes:
        """
        Derive the 16-byte key that signs the PASSWORD_VERIFIER claim.

        username is the USER_ID_FOR_SRP returned by InitiateAuth, not the login name.
        """
        self._require_active()

        server_b = hex_to_int(server_b_hex)
        if server_b % N == 0:
            raise SRPProtocolError("Server public value B is congruent to 0 mod N")
        salt = hex_to_int(salt_hex)

        u = self.compute_u(server_b)
        if u == 0:
            raise SRPProtocolError("Scrambling parameter u is 0")

        x = self.compute_x(username, password, salt)
        shared_secret = self.compute_shared_secret(server_b, u, x)

        self.state = SRPState.KEY_DERIVED
        return derive_key(int_to_padded_bytes(shared_secret), int_to_padded_bytes(u))

    def compute_u(self, server_b: int) -> int:
        self._require_active()
        return hex_to_int(hex_hash(pad_hex(self._large_a) + pad_hex(server_b)))

    def compute_x(self, username: str, password: str, salt: int) -> int:
        # pool name is prefixed directly, only ":" separates user id and password
        username_password_hash = hash_string(f"{self.pool_name}{username}:{password}")
        return hex_to_int(hex_hash(pad_hex(salt) + username_password_hash))

    def compute_shared_secret(self, server_b: int, u: int, x: int) -> int:
        self._require_active()
        # S = (B - k * g^x) ^ (a + u * x) mod N, base normalized into [0, N)
        base = (server_b - self._k * mod_pow(g, x, N)) % N
        return mod_pow(base, self._small_a + u * x, N)
