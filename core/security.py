"""
Password hashing (bcrypt) and bearer token handling (HS256 JWT).

Tokens are stateless: the only claims are the user id in `sub`, an `exp`
timestamp and a `type` marker, so logout cannot revoke them.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

_DEV_SECRET_KEY = "dev-only-asset-maintenance-secret"


def get_secret_key() -> str:
    # Local/dev runs may leave SECRET_KEY unset; production settings require it.
    return settings.SECRET_KEY or _DEV_SECRET_KEY


def get_access_token_lifetime() -> timedelta:
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Over-long input or a malformed stored hash can never match.
        return False


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Sign `data` (which must carry "sub") as an access token.

    `expires_delta` overrides the configured lifetime; a negative value mints
    an already-expired token.
    """
    lifetime = expires_delta if expires_delta is not None else get_access_token_lifetime()
    claims = {
        **data,
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(claims, get_secret_key(), algorithm=ALGORITHM)


def create_user_token(user_id: int) -> str:
    return create_access_token({"sub": str(user_id)})


def decode_token(token: str) -> dict[str, Any] | None:
    """Return the verified claims, or None if the token is malformed, forged or expired."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def verify_token_type(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> dict[str, Any] | None:
    payload = decode_token(token)
    if payload is None or payload.get("type") != expected_type:
        return None
    return payload
