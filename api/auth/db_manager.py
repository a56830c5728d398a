# api/auth/db_manager.py
"""
Business logic for registration and login (the credential store).
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User
from core.errors import AuthenticationError, ConflictError
from core.security import get_password_hash, verify_password
from . import queries

logger = logging.getLogger(__name__)


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(queries.select_user_by_email(email))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(queries.select_user_by_id(user_id))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Raises:
        ConflictError: If the email is already registered
    """
    if await find_by_email(db, email) is not None:
        raise ConflictError("Email already registered", field="email")

    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise ConflictError("Email already registered", field="email") from exc
    await db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """
    Check credentials.

    Raises:
        AuthenticationError: Unknown email or wrong password (same message for both)
    """
    user = await find_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Failed login attempt")
        raise AuthenticationError("Incorrect email or password")

    logger.info("User %s logged in", user.id)
    return user
