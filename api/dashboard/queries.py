# api/dashboard/queries.py
"""
SQLAlchemy query builders for the maintenance due-date summary.
"""
from datetime import date

from sqlalchemy import select

from db_models.asset import Asset
from db_models.maintenance import Maintenance


def select_due_maintenances(user_id: int, due_on_or_before: date):
    """
    Pending maintenances on the user's assets whose next_due_date falls on or
    before `due_on_or_before`. Overdue rows are included: there is no lower bound.

    Each row is (Maintenance, asset_name, asset_description).
    """
    return (
        select(
            Maintenance,
            Asset.name.label("asset_name"),
            Asset.description.label("asset_description"),
        )
        .join(Asset, Maintenance.asset_id == Asset.id)
        .where(
            Asset.user_id == user_id,
            Maintenance.is_completed.is_(False),
            Maintenance.next_due_date.is_not(None),
            Maintenance.next_due_date <= due_on_or_before,
        )
        .order_by(
            Maintenance.next_due_date.asc(),
            Maintenance.completion_date.desc().nulls_last(),
            Maintenance.id.asc(),
        )
    )
