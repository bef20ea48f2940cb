# core/deps.py
"""
FastAPI dependencies for authentication.
"""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User
from api.auth import db_manager as auth_db_manager
from core.errors import AuthenticationError, InvalidTokenError
from core.middleware import principal_ctx_var
from core.security import verify_token_type

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


async def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.

    Raises:
        AuthenticationError: If no token is sent or the user no longer exists (401)
        InvalidTokenError: If the token is malformed, expired or badly signed (403)
    """
    if not token:
        raise AuthenticationError("Authentication required: No token provided.")

    payload = verify_token_type(token)
    if payload is None:
        raise InvalidTokenError()

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        raise InvalidTokenError("Forbidden: Invalid token payload.")

    user = await auth_db_manager.get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("User not found.")

    request.state.principal = str(user.id)
    principal_ctx_var.set(str(user.id))
    return user


# Type alias for cleaner endpoint signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
