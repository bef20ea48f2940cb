# api/assets/db_manager.py
"""
Business logic for asset management.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from core.errors import NotFoundError, ValidationError
from core.ownership import ASSET_NOT_FOUND, authorize_asset
from .models import AssetPatch
from . import queries

logger = logging.getLogger("app.assets")


def _require_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Asset name is required.")
    return name


async def create_asset(
    db: AsyncSession,
    user_id: int,
    name: str | None,
    description: str | None = None,
) -> Asset:
    """
    Create an asset owned by `user_id`.

    Raises:
        ValidationError: If name is missing or blank
    """
    asset = Asset(user_id=user_id, name=_require_name(name), description=description)
    db.add(asset)
    await db.commit()
    await db.refresh(asset)
    logger.info("asset.created", extra={"extra_data": {"asset_id": asset.id}})
    return asset


async def list_assets(db: AsyncSession, user_id: int) -> list[Asset]:
    """Return the user's assets ordered by name."""
    result = await db.execute(queries.select_assets_for_user(user_id))
    return list(result.scalars().all())


async def get_asset(db: AsyncSession, user_id: int, asset_id: int) -> Asset:
    """Get an asset the user owns. Raises NotFoundError otherwise."""
    return await authorize_asset(db, user_id, asset_id)


async def update_asset(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
    patch: AssetPatch,
) -> Asset:
    """
    Apply a partial update to an asset the user owns.

    Raises:
        ValidationError: If the patch is empty or blanks the name
        NotFoundError: If the asset is missing or owned by someone else
    """
    changes = patch.changes()
    if not changes:
        raise ValidationError("At least one field (name or description) is required for update.")
    if "name" in changes:
        _require_name(changes["name"])

    changes["updated_at"] = datetime.now(timezone.utc)
    result = await db.execute(queries.update_asset_for_user(asset_id, user_id, changes))
    asset = result.scalar_one_or_none()
    if asset is None:
        await db.rollback()
        raise NotFoundError(ASSET_NOT_FOUND)

    await db.commit()
    return asset


async def delete_asset(db: AsyncSession, user_id: int, asset_id: int) -> bool:
    """
    Delete an asset the user owns, together with its maintenance records.

    Returns:
        True if a row was removed, False if nothing matched (absent or not owned)
    """
    result = await db.execute(queries.delete_asset_for_user(asset_id, user_id))
    deleted_id = result.scalar_one_or_none()
    await db.commit()
    if deleted_id is None:
        return False
    logger.info("asset.deleted", extra={"extra_data": {"asset_id": deleted_id}})
    return True
