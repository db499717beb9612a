"""Daily energy-saving habits (gamification)."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.db import get_session
from handlers.dependencies import get_advice_service
from services.advice import AdviceService
from utils.logger import logger
from utils.schemas import HabitLogRequest, HabitResponse


router = APIRouter(tags=["habits"])


@router.get("/habits", response_model=list[HabitResponse])
async def list_habits(
    user_id: int = Query(..., alias="userId", ge=1),
    session: AsyncSession = Depends(get_session),
    advice: AdviceService = Depends(get_advice_service),
) -> list[dict]:
    """
    Habits of a user with today's completion state.

    A user without habits gets a generated set first; a failed generation
    is a 503 and nothing is stored.
    """
    if await crud.count_user_habits(session, user_id) == 0:
        logger.info(f"Generating habits for user {user_id}")
        devices = await crud.get_user_devices(session, user_id)
        generated = await advice.get_habits(devices)
        await crud.create_habits(session, user_id, generated["habits"])

    return await crud.get_user_habits(session, user_id)


@router.post("/habits/log")
async def log_habit(
    body: HabitLogRequest,
    session: AsyncSession = Depends(get_session),
) -> dict:
    if not await crud.log_habit_completion(session, body.user_id, body.habit_id):
        return {"message": "Already logged today"}
    return {"success": True}
