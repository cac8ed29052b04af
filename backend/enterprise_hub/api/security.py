"""Bearer-token identity for business write endpoints.

Tokens are issued by the auth service; here we only verify the HS256
signature and read the user id from the ``sub`` (or legacy ``id``)
claim.
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException
from jose import JWTError, jwt

from ..config import settings

logger = logging.getLogger(__name__)


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


def decode_user_id(token: str) -> int:
    """Verify *token* and return the user id it carries.

    Raises:
        HTTPException: 401 when the token is invalid or has no usable id.
    """
    try:
        claims = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.info("Rejected bearer token: %s", type(e).__name__)
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    subject = claims.get("sub", claims.get("id"))
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def get_current_user_id(
    authorization: str = Header(default=None),
) -> int:
    """Require an authenticated caller."""
    token = _extract_bearer(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Access token required")
    return decode_user_id(token)
