# api/dashboard/db_manager.py
"""
Due-date engine for the dashboard.

One query serves both overdue and due-soon records; telling them apart is left
to the client, which compares next_due_date against its own "today".
"""
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from . import queries

DEFAULT_HORIZON_DAYS = 7


def due_cutoff(horizon_days: int, today: date | None = None) -> date:
    """Last next_due_date (inclusive) that counts as due within the horizon."""
    return (today or date.today()) + timedelta(days=horizon_days)


async def get_due_summary(
    db: AsyncSession,
    user_id: int,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    today: date | None = None,
) -> list[dict]:
    """
    List unfinished maintenance across all of the user's assets that is
    overdue or due within `horizon_days`, soonest first.

    Each entry is the maintenance record's columns plus the parent asset's
    name and description.
    """
    if horizon_days < 0:
        raise ValueError("horizon_days must be >= 0")

    stmt = queries.select_due_maintenances(user_id, due_cutoff(horizon_days, today))
    result = await db.execute(stmt)

    summary = []
    for maintenance, asset_name, asset_description in result.all():
        summary.append({
            "id": maintenance.id,
            "asset_id": maintenance.asset_id,
            "service_description": maintenance.service_description,
            "completion_date": maintenance.completion_date,
            "next_due_date": maintenance.next_due_date,
            "notes": maintenance.notes,
            "is_completed": maintenance.is_completed,
            "created_at": maintenance.created_at,
            "updated_at": maintenance.updated_at,
            "asset_name": asset_name,
            "asset_description": asset_description,
        })
    return summary
