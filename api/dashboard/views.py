# api/dashboard/views.py
"""
Dashboard endpoint: upcoming and overdue maintenance across the user's assets.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import DueMaintenance, DueSummaryResponse
from . import db_manager

router = APIRouter(prefix="/maintenances", tags=["dashboard"])


@router.get(
    "/summary",
    response_model=DueSummaryResponse,
    summary="Upcoming and overdue maintenance",
)
async def get_due_summary_endpoint(
    current_user: CurrentUser,
    days: int = Query(
        db_manager.DEFAULT_HORIZON_DAYS,
        ge=0,
        le=365,
        description="Look-ahead window in days",
    ),
    db: AsyncSession = Depends(get_session),
) -> DueSummaryResponse:
    """
    Unfinished maintenance with a next_due_date on or before today + `days`,
    including anything already overdue. Soonest first.
    """
    rows = await db_manager.get_due_summary(db, current_user.id, horizon_days=days)
    return DueSummaryResponse(
        horizon_days=days,
        maintenances=[DueMaintenance.model_validate(row) for row in rows],
    )
