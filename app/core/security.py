import secrets
from typing import Optional

from fastapi import Depends, Header

from app.core.config import Settings, get_settings
from app.core.errors import AuthenticationRequired, InvalidToken


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the credential from an ``Authorization: Bearer <token>`` value."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2:
        return None
    return parts[1] or None


async def verify_token(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    token = extract_token(authorization)
    if not token:
        raise AuthenticationRequired()

    if not secrets.compare_digest(token.encode(), settings.BEARER_TOKEN.encode()):
        raise InvalidToken()
