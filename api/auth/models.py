# api/auth/models.py
"""
Pydantic models for authentication endpoints.

Request fields are optional at the schema level; presence is checked in the
db_manager so a missing field produces the domain's own 400 message.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, ConfigDict


class RegisterRequest(BaseModel):
    """New account details."""
    username: str | None = None
    email: EmailStr | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Login credentials. `identifier` is a username or an email."""
    identifier: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """User data response (never includes the password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by register and login."""
    message: str
    user: UserResponse
    token: str


class Token(BaseModel):
    """OAuth2 token response for the form-based token endpoint."""
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
