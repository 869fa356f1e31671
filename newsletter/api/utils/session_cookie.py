from datetime import datetime
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

SESSION_COOKIE_NAME = "session"


def encode_session_cookie(session_id: UUID, user_id: UUID, expires_at: datetime) -> str:
    """
    Sign the session id into a cookie value

    Args:
        session_id: Session UUID (server-side row)
        user_id: Owning user UUID
        expires_at: Session expiry (naive UTC)

    Returns:
        JWT string (HS256)
    """
    payload = {
        "sid": str(session_id),
        "sub": str(user_id),
        "exp": expires_at,
    }
    return jwt.encode(payload, ApplicationConfig.HMAC_SECRET.get_secret_value(), algorithm="HS256")


def decode_session_cookie(token: str) -> Optional[UUID]:
    """
    Verify a session cookie and return the session id

    Returns:
        Session UUID or None if the signature, expiry or payload is invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.HMAC_SECRET.get_secret_value(), algorithms=["HS256"]
        )
        return UUID(payload["sid"])
    except (JWTError, KeyError, ValueError, TypeError):
        return None
