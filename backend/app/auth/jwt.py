"""
JWT helper utilities.

Tokens are issued elsewhere (login is handled by the surrounding
application); this module signs and verifies them with the shared secret.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from ..config import get_settings


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """
    Create a signed JWT access token for a user.

    Args:
        user_id: Stored as the "sub" claim.
        expires_minutes: Optional override for expiration window in minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    claims = {"sub": str(user_id), "exp": expire}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        ValueError: If token is invalid or signature/expiry check fails.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
