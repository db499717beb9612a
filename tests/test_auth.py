"""Tests for password hashing, tokens and the current-user dependency."""

from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from unittest.mock import patch

from config import settings
from middleware.auth import (
    JWT_ALGORITHM,
    decode_token,
    generate_token,
    get_current_user,
    hash_password,
    verify_password,
)
from utils.helpers import now_utc


def bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_password_hash_round_trip():
    password_hash = hash_password("s3cret-pass")
    assert password_hash != "s3cret-pass"
    assert verify_password(password_hash, "s3cret-pass")
    assert not verify_password(password_hash, "wrong-pass")


def test_token_carries_user_identity(sample_user):
    claims = decode_token(generate_token(sample_user))
    assert claims["sub"] == "1"
    assert claims["email"] == sample_user.email
    assert claims["exp"] > claims["iat"]


def test_token_with_wrong_secret_is_rejected(sample_user):
    token = jwt.encode({"sub": "1"}, "another-secret", algorithm=JWT_ALGORITHM)
    with pytest.raises(jwt.InvalidTokenError):
        decode_token(token)


@pytest.mark.asyncio
async def test_current_user_resolved(mock_session, sample_user):
    with patch("middleware.auth.get_user", return_value=sample_user) as get_user:
        user = await get_current_user(bearer(generate_token(sample_user)), mock_session)

    assert user is sample_user
    get_user.assert_awaited_once_with(mock_session, 1)


@pytest.mark.asyncio
async def test_missing_token(mock_session):
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(None, mock_session)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Access token required"


@pytest.mark.asyncio
async def test_expired_token(mock_session):
    issued = now_utc() - timedelta(days=30)
    token = jwt.encode(
        {"sub": "1", "iat": issued, "exp": issued + timedelta(hours=1)},
        settings.jwt_secret_key,
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(bearer(token), mock_session)
    assert exc_info.value.detail == "Token expired"


@pytest.mark.asyncio
async def test_garbage_token(mock_session):
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(bearer("not-a-jwt"), mock_session)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid token"


@pytest.mark.asyncio
async def test_token_for_deleted_user(mock_session, sample_user):
    with patch("middleware.auth.get_user", return_value=None):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(bearer(generate_token(sample_user)), mock_session)
    assert exc_info.value.detail == "User not found"
