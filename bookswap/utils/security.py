"""Credential hashing helpers."""
import bcrypt


def _truncate(password: str) -> bytes:
    # Bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    """Hash a user credential with bcrypt."""
    hashed = bcrypt.hashpw(_truncate(password), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a credential against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_truncate(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
