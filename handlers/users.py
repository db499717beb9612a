"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.db import get_session
from database.models import User
from middleware.auth import generate_token, get_current_user, hash_password, verify_password
from middleware.rate_limit import login_limiter, register_limiter
from utils.logger import logger
from utils.schemas import (
    AuthResponse,
    BudgetRequest,
    BudgetResponse,
    LoginRequest,
    OnboardingRequest,
    RegisterRequest,
    UserResponse,
)


router = APIRouter(tags=["users"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        **UserResponse.model_validate(user).model_dump(),
        token=generate_token(user),
    )


# ============== AUTH ==============

@router.post("/register", response_model=AuthResponse, dependencies=[Depends(register_limiter)])
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    if await crud.get_user_by_email(session, body.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    user = await crud.create_user(
        session,
        email=body.email,
        password_hash=hash_password(body.password),
        name=body.name,
        province=body.province,
        city=body.city,
        monthly_spend=body.monthly_spend or 0,
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(login_limiter)])
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    user = await crud.get_user_by_email(session, body.email)
    if not user or not verify_password(user.password, body.password):
        logger.warning(f"Failed login for {body.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info(f"User {user.id} logged in")
    return _auth_response(user)


# ============== PROFILE ==============

@router.put("/users/onboarding", response_model=UserResponse)
async def save_onboarding(
    body: OnboardingRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Save the household profile of the authenticated user."""
    updated = await crud.update_user_profile(session, user.id, body.to_profile_updates())
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return updated


@router.put("/users/budget", response_model=BudgetResponse)
async def update_budget(
    body: BudgetRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BudgetResponse:
    updated = await crud.update_budget(session, user.id, body.budget)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return BudgetResponse(monthly_budget=float(updated.monthly_budget))
