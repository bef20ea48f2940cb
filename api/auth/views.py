# api/auth/views.py
"""
Authentication endpoints: register, login, logout and profile.
"""
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from core.security import create_user_token
from .models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    Token,
    UserResponse,
)
from . import db_manager


router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """
    Create an account and return a token so the client is logged in right away.
    """
    user = await db_manager.register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        message="User registered successfully.",
        user=UserResponse.model_validate(user),
        token=create_user_token(user.id),
    )


@router.post("/login", response_model=AuthResponse, summary="Log in with username or email")
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> AuthResponse:
    user = await db_manager.authenticate_user(db, credentials.identifier, credentials.password)
    return AuthResponse(
        message="Logged in successfully.",
        user=UserResponse.model_validate(user),
        token=create_user_token(user.id),
    )


@router.post("/token", response_model=Token, summary="OAuth2 compatible token login")
async def login_for_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
) -> Token:
    """
    Form-based login used by the interactive API docs. The `username` form
    field accepts a username or an email.
    """
    user = await db_manager.authenticate_user(db, form_data.username, form_data.password)
    return Token(access_token=create_user_token(user.id))


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout() -> MessageResponse:
    """
    Tokens are stateless, so logging out is the client discarding its token.
    There is no server-side revocation list.
    """
    return MessageResponse(message="Logged out successfully.")


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's profile."""
    return UserResponse.model_validate(current_user)
