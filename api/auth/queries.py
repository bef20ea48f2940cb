"""
SQLAlchemy query builders for user lookups.
"""
from sqlalchemy import select, or_

from db_models.user import User


def select_user_by_id(user_id: int):
    """Select a user by primary key."""
    return select(User).where(User.id == user_id)


def select_user_by_identifier(identifier: str, email: str | None = None):
    """
    Select a user whose username equals `identifier` or whose email equals
    `email` (defaults to `identifier`).
    """
    return select(User).where(
        or_(User.username == identifier, User.email == (email or identifier))
    )


def select_users_clashing_with(username: str, email: str):
    """Select users that already hold the given username or email."""
    return select(User).where(
        or_(User.username == username, User.email == email)
    )
