# core/deps.py
"""
FastAPI dependencies for authentication.

The verified identity is handed to endpoints as an explicit ``SessionUser``
value; nothing about the caller is kept in module or process state.
"""
import logging
from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db import get_session
from db_models.user import User
from core.errors import AuthenticationError
from core.security import decode_token

logger = logging.getLogger(__name__)

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

SESSION_COOKIE_NAME = getattr(settings, "SESSION_COOKIE_NAME", "SESSION_ID")

# Path ids must fit a signed 64-bit column
MAX_ROW_ID = 2**63 - 1
RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


class SessionUser(BaseModel):
    """Identity of the authenticated requester."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    email: str


def get_session_token(
    request: Request,
    bearer: Annotated[str | None, Depends(oauth2_scheme)],
) -> str | None:
    """Bearer header wins; the http-only session cookie is the fallback."""
    if bearer:
        return bearer
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_current_user(
    token: Annotated[str | None, Depends(get_session_token)],
    db: AsyncSession = Depends(get_session),
) -> SessionUser:
    """
    Resolve the session token into the requester's identity.

    Raises:
        AuthenticationError: If token is missing, invalid, or user not found
    """
    if token is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(token)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError("Invalid token payload")

    try:
        user_id = int(user_id)
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid user ID in token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        logger.info("Session token references missing user %s", user_id)
        raise AuthenticationError("User not found")

    return SessionUser.model_validate(user)


# Type alias for cleaner endpoint signatures
CurrentUser = Annotated[SessionUser, Depends(get_current_user)]
