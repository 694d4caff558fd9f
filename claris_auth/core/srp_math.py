"""
Big integer helpers for the Cognito flavour of SRP-6a.

Group parameters are the 3072-bit MODP prime from RFC 3526 with generator 2.
Every integer that goes through a hash is serialized with pad_hex() so that a
signed big-endian parser on the server side reads it back as non-negative.
"""

import re

N_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74020BBEA63B139B22514A08798E3404DDEF"
    "9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7EDEE386B"
    "FB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F83655D23DC"
    "A3AD961C62F356208552BB9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3BE39E772C180E86"
    "039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF6955817183995497CEA956AE515D2261898FA051015728E5A8AAAC42DAD"
    "33170D04507A33A85521ABDF1CBA64ECFB850458DBEF0A8AEA71575D060C7DB3970F85A6E1E4C7ABF5AE8CDB0933D71E8C94"
    "E04A25619DCEE3D2261AD2EE6BF12FFA06D98A0864D87602733EC86A64521F2B18177B200CBBE117577A615D6C770988C0BA"
    "D946E208E24FA074E5AB3143DB5BFCE0FD108E4B82D120A93AD2CAFFFFFFFFFFFFFFFF"
)
G_HEX = "2"

N = int(N_HEX, 16)
g = int(G_HEX, 16)

HEX_MSB_REGEX = re.compile(r"^[89a-f]", re.IGNORECASE)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """base^exponent mod modulus for non-negative integers of any size."""
    if base < 0 or exponent < 0:
        raise ValueError("mod_pow expects non-negative operands; reduce with x % N first")
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    # builtin pow does square-and-multiply on arbitrary precision ints
    return pow(base, exponent, modulus)


def pad_hex(value: int) -> str:
    """Even-length hex of value, with a leading "00" byte if the top nibble would read as a sign bit."""
    if value < 0:
        raise ValueError("pad_hex expects a non-negative integer")
    hex_str = format(value, "x")
    if len(hex_str) % 2 != 0:
        hex_str = "0" + hex_str
    if HEX_MSB_REGEX.match(hex_str):
        hex_str = "00" + hex_str
    return hex_str


def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    # odd-length input gets a leading zero nibble
    if len(hex_str) % 2 != 0:
        hex_str = "0" + hex_str
    return bytes.fromhex(hex_str)


def hex_to_int(hex_str: str) -> int:
    return int(hex_str, 16)


def int_to_padded_bytes(value: int) -> bytes:
    return hex_to_bytes(pad_hex(value))
