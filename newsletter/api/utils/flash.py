"""
One-shot flash messages carried in a signed cookie.

A message is added to a redirect response and shown by the next GET that
reads it; reading handlers delete the cookie.
"""

from typing import Dict, List

from fastapi import Request, Response
from jose import JWTError, jwt

from config import ApplicationConfig

FLASH_COOKIE_NAME = "_flash"

LEVEL_INFO = "info"
LEVEL_ERROR = "error"


def _secret() -> str:
    return ApplicationConfig.HMAC_SECRET.get_secret_value()


def read_flash_messages(request: Request) -> List[Dict[str, str]]:
    """Return pending messages; a tampered cookie yields no messages."""
    token = request.cookies.get(FLASH_COOKIE_NAME)
    if not token:
        return []
    try:
        payload = jwt.decode(token, _secret(), algorithms=["HS256"])
    except JWTError:
        return []
    messages = payload.get("messages")
    if not isinstance(messages, list):
        return []
    return [
        {"level": str(m.get("level")), "content": str(m.get("content"))}
        for m in messages
        if isinstance(m, dict)
    ]


def set_flash(response: Response, content: str, level: str = LEVEL_INFO) -> None:
    token = jwt.encode(
        {"messages": [{"level": level, "content": content}]}, _secret(), algorithm="HS256"
    )
    response.set_cookie(FLASH_COOKIE_NAME, token, httponly=True, samesite="lax")


def clear_flash(response: Response) -> None:
    response.delete_cookie(FLASH_COOKIE_NAME)
