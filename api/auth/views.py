# api/auth/views.py
"""
Registration, login and session endpoints.

Tokens are returned in the body for API clients and also set as an
http-only session cookie for the browser client.
"""
from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db import get_session
from db_models.user import User
from core.errors import AuthenticationError
from core.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    create_refresh_token,
    session_claims,
    verify_token_type,
)
from core.deps import CurrentUser, SESSION_COOKIE_NAME
from .models import (
    Token,
    TokenRefresh,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from . import db_manager


router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_session(user: User, response: Response) -> LoginResponse:
    """Create access/refresh tokens and set the session cookie."""
    claims = session_claims(user)
    access_token = create_access_token(claims)
    refresh_token = create_refresh_token(claims)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=access_token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=getattr(settings, "SESSION_COOKIE_SECURE", False),
        samesite="lax",
    )

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(
    payload: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """Create an account and start a session for it."""
    user = await db_manager.register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return _issue_session(user, response)


@router.post("/login", response_model=LoginResponse, summary="Login and get tokens")
async def login(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    OAuth2 compatible login endpoint (the username field carries the email).
    """
    user = await db_manager.authenticate(db, form_data.username.strip(), form_data.password)
    return _issue_session(user, response)


@router.post("/login/json", response_model=LoginResponse, summary="Login with JSON body")
async def login_json(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    Alternative login endpoint accepting JSON body.
    Used by the single-page client.
    """
    user = await db_manager.authenticate(db, credentials.email, credentials.password)
    return _issue_session(user, response)


@router.post("/refresh", response_model=Token, summary="Refresh access token")
async def refresh_token(
    request: TokenRefresh,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> Token:
    """Get a new token pair using a refresh token."""
    payload = verify_token_type(request.refresh_token, "refresh")
    if payload is None:
        raise AuthenticationError("Invalid or expired refresh token")

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid token payload")

    user = await db_manager.get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("User not found")

    session = _issue_session(user, response)
    return Token(access_token=session.access_token, refresh_token=session.refresh_token)


@router.api_route("/logout", methods=["POST", "DELETE"], summary="End the browser session")
async def logout(response: Response) -> dict:
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Identity carried by the current session."""
    return UserResponse(id=current_user.id, name=current_user.name, email=current_user.email)
