"""
Password hashing for user accounts.

bcrypt only looks at the first 72 bytes of a password. Longer passwords
are refused instead of being cut short, so two different passwords can
never share a hash.
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password is longer than {BCRYPT_MAX_BYTES} bytes")
    return encoded


def hash_password(password: str) -> str:
    """Return the bcrypt hash of ``password`` as text for the ``hashed_password`` column."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Malformed input never matches."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
