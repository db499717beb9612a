"""Solar quotation requests and report requests."""

import json

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.db import get_session
from database.models import Quotation, User
from middleware.auth import get_current_user
from utils.logger import logger
from utils.schemas import MessageResponse, QuotationCreate, QuotationResponse, ReportRequest


router = APIRouter(tags=["quotations"])


@router.post("/quotations", response_model=QuotationResponse)
async def request_quotation(
    body: QuotationCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Quotation:
    """Store the chosen package with a snapshot of the requesting user."""
    details = body.package_details
    if isinstance(details, dict):
        details = json.dumps(details)

    return await crud.create_quotation(
        session,
        user,
        package_tier=body.package_tier,
        package_details=details,
        devices_summary=body.devices_summary,
        total_cost=body.total_cost,
    )


@router.get("/quotations", response_model=list[QuotationResponse])
async def my_quotations(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[Quotation]:
    return await crud.get_user_quotations(session, user.id)


@router.post("/reports/request", response_model=MessageResponse)
async def request_report(
    body: ReportRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    target = await crud.get_user(session, body.user_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info(f"Report requested by user {user.id} for {target.name} ({target.email})")
    return MessageResponse(message="Report requested successfully")
