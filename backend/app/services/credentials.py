"""Password hashing with scrypt.

Stored form is ``<hex digest>.<hex salt>``. Neither half can contain a dot,
so the first dot always separates them.
"""

import hashlib
import secrets

from app.errors import CorruptCredential

SALT_BYTES = 16
KEY_LENGTH = 64

# Work factors: N=2**14, r=8 needs 16 MiB per derivation
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh random salt."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Check a plaintext password against a stored hash.

    Raises CorruptCredential when ``stored`` is not in the expected form, so
    callers can tell a damaged row apart from a wrong password.
    """
    digest_hex, sep, salt = stored.partition(".")
    if not sep or not digest_hex or not salt:
        raise CorruptCredential("Stored credential is missing its salt delimiter")
    try:
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        raise CorruptCredential("Stored credential digest is not hex") from None
    if len(expected) != KEY_LENGTH:
        raise CorruptCredential("Stored credential digest has the wrong length")

    return secrets.compare_digest(_derive(password, salt), expected)
