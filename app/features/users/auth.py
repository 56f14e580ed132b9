"""
Authentication utilities: password hashing and access tokens.
"""
from datetime import datetime, timedelta, timezone

import jwt
from pwdlib import PasswordHash

from app.core import config
from app.core.errors import UnauthorizedError


password_hash = PasswordHash.recommended()


def hash_password(password: str) -> str:
    """Hash ``password`` with argon2."""
    return password_hash.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Return ``True`` if ``password`` matches ``hashed``."""
    return password_hash.verify(password, hashed)


def create_access_token(user_id: str) -> str:
    """Sign an access token whose subject is ``user_id``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(days=config.JWT_EXPIRES_IN_DAYS),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_jwt_token(token: str) -> dict:
    """
    Verify an access token and return its payload.

    Raises:
        UnauthorizedError: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid auth token") from exc
