"""JWT bearer authentication and password hashing."""

from datetime import timedelta
from typing import Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import ExpiredSignatureError, InvalidTokenError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from config import settings
from database.db import get_session
from database.crud import get_user
from database.models import User
from utils.helpers import now_utc
from utils.logger import logger

JWT_ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def generate_token(user: User) -> str:
    """Signed token carrying the user id (``sub``) and email."""
    now = now_utc()
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expiration_hours),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        ExpiredSignatureError: token expired
        InvalidTokenError: bad signature or malformed token
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[JWT_ALGORITHM])


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the authenticated user from the Authorization header.

    Only registered users with a valid, unexpired token pass.
    """
    if credentials is None:
        raise _unauthorized("Access token required")

    try:
        claims = decode_token(credentials.credentials)
        user_id = int(claims["sub"])
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except (InvalidTokenError, KeyError, ValueError) as e:
        logger.warning(f"Rejected access token: {e}")
        raise _unauthorized("Invalid token")

    user = await get_user(session, user_id)
    if not user:
        logger.warning(f"Access denied for unknown user {user_id}")
        raise _unauthorized("User not found")

    return user
