"""Password hashing and input-length limits for account credentials."""

import re

import bcrypt

# Bcrypt cost (rounds); overridden per deployment through BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 10

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 100
NAME_MIN_LEN = 2
NAME_MAX_LEN = 50

PASSWORD_STRENGTH_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")


def normalize_email(email: str) -> str:
    """Emails are compared and stored lower-cased and trimmed."""
    return email.strip().lower()


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
