"""
Password hashing with scrypt.

Stored format is "<derived key hex>.<salt hex>" so verification can redo the
derivation with the same salt.
"""
import hashlib
import hmac
import secrets

SALT_BYTES = 16
KEY_LENGTH = 64

# RFC 7914 interactive-login parameters
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt.hex()}"


def verify_password(candidate: str, stored: str) -> bool:
    """Return True if candidate matches the stored encoding.

    A malformed stored value is treated as a mismatch.
    """
    if not isinstance(candidate, str) or not isinstance(stored, str):
        return False

    key_hex, sep, salt_hex = stored.partition(".")
    if not sep:
        return False

    try:
        expected = bytes.fromhex(key_hex)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False

    if len(expected) != KEY_LENGTH or not salt:
        return False

    return hmac.compare_digest(_derive(candidate, salt), expected)
