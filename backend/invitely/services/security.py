"""
Password hashing helpers.
"""
import bcrypt


def hash_password(password: str) -> str:
    """Hash password using bcrypt (random salt, iterative work factor)."""
    password_bytes = password.encode('utf-8')
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        return False
