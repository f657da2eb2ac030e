import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from backend import config
from backend.errors import HashingFailure

logger = logging.getLogger("backend.auth")


# ---------------- PASSWORD HASHING ----------------

def hash_password(password: str, rounds: int = config.BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt. A fresh salt is generated on every call."""
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    except (ValueError, TypeError) as e:
        logger.error(f"bcrypt hash failed: {e}")
        raise HashingFailure() from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash (salt and cost are read from the hash)."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error(f"bcrypt verify failed: {e}")
        raise HashingFailure("Error interno del servidor.") from e


# ---------------- JWT TOKEN CREATION ----------------

def create_access_token(user_id) -> str:
    """Generate JWT token for a user."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=config.JWT_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)

