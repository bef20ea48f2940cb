# api/auth/db_manager.py
"""
Business logic for registration and login.
"""
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User
from core.errors import ConflictError, InvalidCredentialsError, ValidationError
from core.security import MAX_PASSWORD_BYTES, get_password_hash, password_too_long, verify_password
from . import queries

logger = logging.getLogger("app.auth")


def normalize_identifier(identifier: str) -> str:
    """
    Bring an email-shaped identifier into the form stored at registration
    (EmailStr keeps the normalized address, e.g. with a lowercased domain).
    Usernames and unparseable input are returned unchanged.
    """
    if "@" not in identifier:
        return identifier
    try:
        return validate_email(identifier, check_deliverability=False).normalized
    except EmailNotValidError:
        return identifier


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(queries.select_user_by_id(user_id))
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession,
    username: str | None,
    email: str | None,
    password: str | None,
) -> User:
    """
    Create a user account.

    Raises:
        ValidationError: If username, email or password is missing
        ConflictError: If the username or email is already taken
    """
    username = (username or "").strip()
    email = (email or "").strip()
    if not username or not email or not password:
        raise ValidationError("Username, email, and password are required.")
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

    result = await db.execute(queries.select_users_clashing_with(username, email))
    if result.scalars().first() is not None:
        raise ConflictError("Username or email already taken.")

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration; the unique index decides.
        await db.rollback()
        raise ConflictError("Username or email already taken.") from exc
    await db.refresh(user)

    logger.info("user.registered", extra={"extra_data": {"user_id": user.id}})
    return user


async def authenticate_user(
    db: AsyncSession,
    identifier: str | None,
    password: str | None,
) -> User:
    """
    Resolve a user by username or email and check the password.

    Raises:
        ValidationError: If identifier or password is missing
        InvalidCredentialsError: If no user matches or the password is wrong
    """
    identifier = (identifier or "").strip()
    if not identifier or not password:
        raise ValidationError("Identifier (username/email) and password are required.")

    result = await db.execute(
        queries.select_user_by_identifier(identifier, email=normalize_identifier(identifier))
    )
    user = result.scalars().first()

    if user is None or not verify_password(password, user.hashed_password):
        logger.info("user.login_failed")
        raise InvalidCredentialsError()

    return user
