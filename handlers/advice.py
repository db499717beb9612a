"""AI advice endpoints: scan, tips, completeness, interview, onboarding, solar quotes."""

import base64
import binascii
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.db import get_session
from handlers.dependencies import get_advice_service
from middleware.rate_limit import ai_limiter
from services.advice import AdviceService
from services.gemini import ImageInput
from services.tariffs import get_seasonal_rate
from utils.logger import logger
from utils.schemas import (
    DevicesRequest,
    OnboardRequest,
    ScanRequest,
    SolarQuoteRequest,
    TipsRequest,
    devices_payload,
)


router = APIRouter(prefix="/gemini", tags=["advice"], dependencies=[Depends(ai_limiter)])


def _decode_image(body: ScanRequest) -> ImageInput:
    data = body.image_base64
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return ImageInput(data=base64.b64decode(data, validate=True), mime_type=body.mime_type)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid image data")


async def _tips_context(session: AsyncSession, body: TipsRequest) -> dict[str, Any]:
    """Household profile and local tariff for the tips prompt."""
    context: dict[str, Any] = {}
    if body.user_id is not None:
        try:
            user = await crud.get_user(session, body.user_id)
        except Exception as e:
            logger.warning(f"Profile lookup for tips failed for user {body.user_id}: {e}")
            user = None
        if user:
            context.update(crud.user_profile(user))

    location = body.location or context.get("city") or body.province or context.get("province")
    if location:
        tariff = get_seasonal_rate(location)
        context["municipality"] = tariff["municipality"]
        context["tariff_r_per_kwh"] = tariff["seasonal_rate"]
        context["season"] = tariff["season"]
    return context


@router.post("/scan")
async def scan_device(
    body: ScanRequest,
    advice: AdviceService = Depends(get_advice_service),
) -> dict:
    """Identify an appliance and its wattage from a photo."""
    return await advice.scan_device(_decode_image(body))


@router.post("/tips")
async def energy_tips(
    body: TipsRequest,
    session: AsyncSession = Depends(get_session),
    advice: AdviceService = Depends(get_advice_service),
) -> dict:
    """Always answers: AI tips, cached tips or offline tips."""
    context = await _tips_context(session, body)
    return await advice.get_tips(devices_payload(body.devices), context)


@router.post("/completeness")
async def check_completeness(
    body: DevicesRequest,
    advice: AdviceService = Depends(get_advice_service),
) -> dict:
    return await advice.check_completeness(devices_payload(body.devices))


@router.post("/interview")
async def interview(
    body: DevicesRequest,
    advice: AdviceService = Depends(get_advice_service),
) -> dict | None:
    """Follow-up question about a likely missing appliance, or null."""
    return await advice.interview(devices_payload(body.devices))


@router.post("/onboard")
async def onboarding_question(
    body: OnboardRequest,
    session: AsyncSession = Depends(get_session),
    advice: AdviceService = Depends(get_advice_service),
) -> dict:
    """Next onboarding question; the stored profile is merged under the sent one."""
    profile: dict[str, Any] = {}
    if body.user_id is not None:
        user = await crud.get_user(session, body.user_id)
        if user:
            profile.update(crud.user_profile(user))
    profile.update(body.profile)

    return await advice.onboarding_question(profile, devices_payload(body.devices))


@router.post("/solar-quotes")
async def solar_quotes(
    body: SolarQuoteRequest,
    advice: AdviceService = Depends(get_advice_service),
) -> dict:
    return await advice.solar_quotes(
        devices_payload(body.devices),
        location=body.location,
        province=body.province,
        monthly_spend=body.monthly_spend,
    )
