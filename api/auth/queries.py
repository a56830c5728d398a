# api/auth/queries.py
"""
SQLAlchemy query builders for the credential store.
"""
from sqlalchemy import select

from db_models.user import User


def select_user_by_email(email: str):
    return select(User).where(User.email == email)


def select_user_by_id(user_id: int):
    return select(User).where(User.id == user_id)
