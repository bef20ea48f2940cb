# api/maintenances/db_manager.py
"""
Business logic for maintenance records.

Field rules enforced here, before anything reaches the database:
- service_description is required and non-blank
- a record marked completed must carry a completion_date
"""
import logging
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.maintenance import Maintenance
from core.errors import NotFoundError, ValidationError
from core.ownership import MAINTENANCE_NOT_FOUND, authorize_asset, authorize_maintenance
from .models import MaintenancePatch
from . import queries

logger = logging.getLogger("app.maintenances")

COMPLETION_DATE_REQUIRED = "Completion date is required if maintenance is marked as completed."


def _require_description(service_description: str | None) -> str:
    if service_description is None or not service_description.strip():
        raise ValidationError("Service description is required.")
    return service_description


async def create_maintenance(
    db: AsyncSession,
    user_id: int,
    asset_id: int | None,
    service_description: str | None,
    *,
    completion_date: date | None = None,
    next_due_date: date | None = None,
    notes: str | None = None,
    is_completed: bool | None = None,
) -> Maintenance:
    """
    Log a maintenance event against an asset the user owns.

    Raises:
        ValidationError: If asset_id/service_description is missing, or the
            record is marked completed without a completion_date
        NotFoundError: If the asset is missing or owned by someone else
    """
    if asset_id is None or not service_description or not service_description.strip():
        raise ValidationError("Asset ID and service description are required.")
    if is_completed and completion_date is None:
        raise ValidationError(COMPLETION_DATE_REQUIRED)

    await authorize_asset(db, user_id, asset_id)

    maintenance = Maintenance(
        asset_id=asset_id,
        service_description=service_description,
        completion_date=completion_date,
        next_due_date=next_due_date,
        notes=notes,
        is_completed=bool(is_completed),
    )
    db.add(maintenance)
    await db.commit()
    await db.refresh(maintenance)
    logger.info(
        "maintenance.created",
        extra={"extra_data": {"maintenance_id": maintenance.id, "asset_id": asset_id}},
    )
    return maintenance


async def list_maintenances(db: AsyncSession, asset_id: int) -> list[Maintenance]:
    """
    Return an asset's maintenance log, newest first.

    The caller must have authorized the asset already.
    """
    result = await db.execute(queries.select_maintenances_for_asset(asset_id))
    return list(result.scalars().all())


async def list_maintenances_for_owner(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
) -> list[Maintenance]:
    """Authorize the asset, then return its maintenance log."""
    await authorize_asset(db, user_id, asset_id)
    return await list_maintenances(db, asset_id)


async def get_maintenance(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
    maintenance_id: int,
) -> Maintenance:
    return await authorize_maintenance(db, user_id, asset_id, maintenance_id)


def _completion_guards(changes: dict) -> list:
    """
    Work out what the UPDATE must additionally require so that the resulting
    row never has is_completed = true with a null completion_date.

    Cases the patch decides on its own are rejected here; cases that depend on
    the stored row become extra WHERE conditions.
    """
    completing = changes.get("is_completed") is True
    if "completion_date" in changes:
        if completing and changes["completion_date"] is None:
            raise ValidationError(COMPLETION_DATE_REQUIRED)
        if changes["completion_date"] is None and "is_completed" not in changes:
            # Clearing the date is only allowed on a record that is not completed.
            return [Maintenance.is_completed.is_(False)]
        return []
    if completing:
        return [Maintenance.completion_date.is_not(None)]
    return []


async def update_maintenance(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
    maintenance_id: int,
    patch: MaintenancePatch,
) -> Maintenance:
    """
    Apply a partial update to a maintenance record.

    Raises:
        ValidationError: If the patch is empty, blanks required fields, or would
            leave a completed record without a completion_date
        NotFoundError: If the asset or record is missing or not the user's
    """
    changes = patch.changes()
    if not changes:
        raise ValidationError(
            "At least one field (service_description, completion_date, "
            "next_due_date, notes, or is_completed) is required for update."
        )
    if "service_description" in changes:
        _require_description(changes["service_description"])
    if "is_completed" in changes and changes["is_completed"] is None:
        raise ValidationError("is_completed must be true or false.")

    guards = _completion_guards(changes)

    # Asset first, so a foreign or missing asset gets the asset-level message.
    await authorize_asset(db, user_id, asset_id)

    changes["updated_at"] = datetime.now(timezone.utc)
    result = await db.execute(
        queries.update_maintenance_for_owner(maintenance_id, asset_id, user_id, changes, *guards)
    )
    maintenance = result.scalar_one_or_none()
    if maintenance is None:
        await db.rollback()
        if guards:
            # Nothing matched: either the record is gone, or the guard refused it.
            existing = await db.execute(
                queries.select_maintenance_for_asset(maintenance_id, asset_id)
            )
            if existing.scalar_one_or_none() is not None:
                raise ValidationError(COMPLETION_DATE_REQUIRED)
        raise NotFoundError(MAINTENANCE_NOT_FOUND)

    await db.commit()
    logger.info(
        "maintenance.updated",
        extra={"extra_data": {"maintenance_id": maintenance.id, "fields": sorted(changes)}},
    )
    return maintenance


async def delete_maintenance(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
    maintenance_id: int,
) -> bool:
    """
    Delete a maintenance record under an asset the user owns.

    Raises:
        NotFoundError: If the asset is missing or owned by someone else

    Returns:
        True if a row was removed, False if the record was not under this asset
    """
    await authorize_asset(db, user_id, asset_id)
    result = await db.execute(
        queries.delete_maintenance_for_owner(maintenance_id, asset_id, user_id)
    )
    deleted_id = result.scalar_one_or_none()
    await db.commit()
    if deleted_id is None:
        return False
    logger.info("maintenance.deleted", extra={"extra_data": {"maintenance_id": deleted_id}})
    return True
