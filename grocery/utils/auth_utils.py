import logging

import jwt
from fastapi import HTTPException, Request, status

from config import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def read_catalog_token(authorization: str) -> dict:
    """Verify an admin bearer header and return its claims."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise _unauthorized("Missing bearer token")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise _unauthorized("Missing bearer token")

    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired") from None
    except jwt.InvalidTokenError as exc:
        logger.info(f"Rejected admin token: {exc}")
        raise _unauthorized("Invalid token") from None


async def get_current_user(request: Request) -> str:
    """Admin routes dependency; returns the caller's user id."""
    claims = read_catalog_token(request.headers.get("Authorization"))
    user_id = claims.get("user_id") or claims.get("sub")
    if not user_id:
        raise _unauthorized("Token carries no user id")
    request.state.user_id = str(user_id)
    return str(user_id)
