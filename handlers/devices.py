"""Device and usage-log endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.db import get_session
from utils.schemas import (
    DeviceCreate,
    DeviceResponse,
    DeviceUpdate,
    MessageResponse,
    UsageCreate,
    UsageHistoryItem,
    UsageLogResponse,
)


router = APIRouter(tags=["devices"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Device not found")


# ============== DEVICES ==============

@router.get("/devices", response_model=list[DeviceResponse])
async def list_devices(
    user_id: int = Query(..., alias="userId", ge=1),
    session: AsyncSession = Depends(get_session),
) -> list[dict]:
    """Devices of a user with hours/days from their latest usage log."""
    return await crud.get_user_devices(session, user_id)


@router.post("/devices", response_model=DeviceResponse)
async def add_device(
    body: DeviceCreate,
    session: AsyncSession = Depends(get_session),
) -> dict:
    device = await crud.create_device(
        session,
        name=body.name,
        watts=body.watts,
        user_id=body.user_id,
        surge_watts=body.surge_watts,
        image_url=body.image_url,
    )
    return crud.device_to_dict(device)


@router.put("/devices/{device_id}", response_model=DeviceResponse)
async def edit_device(
    device_id: int,
    body: DeviceUpdate,
    session: AsyncSession = Depends(get_session),
) -> dict:
    device = await crud.update_device(
        session,
        device_id,
        name=body.name,
        watts=body.watts,
        surge_watts=body.surge_watts,
        image_url=body.image_url,
    )
    if not device:
        raise _not_found()
    return crud.device_to_dict(device)


@router.delete("/devices/{device_id}", response_model=MessageResponse)
async def remove_device(
    device_id: int,
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    if not await crud.delete_device(session, device_id):
        raise _not_found()
    return MessageResponse(message="Device deleted successfully")


# ============== USAGE ==============

@router.post("/usage", response_model=UsageLogResponse)
async def log_usage(
    body: UsageCreate,
    session: AsyncSession = Depends(get_session),
):
    if not await crud.get_device(session, body.device_id):
        raise _not_found()
    return await crud.create_usage_log(
        session,
        device_id=body.device_id,
        hours_per_day=body.hours_per_day,
        days_per_week=body.days_per_week,
    )


@router.get("/usage", response_model=list[UsageHistoryItem])
async def usage_history(
    user_id: int | None = Query(default=None, alias="userId", ge=1),
    session: AsyncSession = Depends(get_session),
) -> list[dict]:
    """Usage history, newest first; all users unless ``userId`` is given."""
    return await crud.get_usage_history(session, user_id)
