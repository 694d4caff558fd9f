# SHA-256 / HMAC helpers used by the SRP math and the claim signature
import hashlib
import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from claris_auth.core.srp_math import hex_to_bytes

INFO_BITS = b"Caldera Derived Key"
DERIVED_KEY_LENGTH = 16


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    return hmac.new(key, message, hashlib.sha256).digest()


def hex_hash(hex_str: str) -> str:
    """SHA-256 of the bytes a hex string encodes, as 64 hex chars."""
    return sha256(hex_to_bytes(hex_str)).hex().rjust(64, "0")


def hash_string(value: str) -> str:
    """SHA-256 of a UTF-8 string, as 64 hex chars."""
    return sha256(value.encode("utf-8")).hex().rjust(64, "0")


def derive_key(shared_secret: bytes, salt: bytes) -> bytes:
    """
    Single-block HKDF-SHA256: PRK = HMAC(salt, S), OKM = HMAC(PRK, info | 0x01)[:16].

    Cognito verifies the claim signature with a key built this way, so the info
    string must stay byte-for-byte "Caldera Derived Key".
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=DERIVED_KEY_LENGTH,
        salt=salt,
        info=INFO_BITS,
    )
    return hkdf.derive(shared_secret)
