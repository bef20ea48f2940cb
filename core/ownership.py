# core/ownership.py
"""
Ownership checks for the User -> Asset -> Maintenance chain.

Every lookup carries the owner (or parent) id in the same predicate as the
resource id, so "does not exist" and "belongs to someone else" produce the same
NotFoundError. Ownership is re-derived on each call; nothing is cached.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from db_models.maintenance import Maintenance
from api.assets import queries as asset_queries
from api.maintenances import queries as maintenance_queries
from .errors import NotFoundError

ASSET_NOT_FOUND = "Asset not found or you do not have permission to access it."
MAINTENANCE_NOT_FOUND = "Maintenance log not found or does not belong to this asset."


async def authorize_asset(db: AsyncSession, user_id: int, asset_id: int) -> Asset:
    """Return the asset if `user_id` owns it, else raise NotFoundError."""
    result = await db.execute(asset_queries.select_asset_for_user(asset_id, user_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise NotFoundError(ASSET_NOT_FOUND)
    return asset


async def authorize_maintenance(
    db: AsyncSession,
    user_id: int,
    asset_id: int,
    maintenance_id: int,
) -> Maintenance:
    """
    Return the maintenance record if it hangs off an asset owned by `user_id`.

    The asset is authorized first; the record is then resolved by the
    (maintenance_id, asset_id) pair, so an id that lives under a different
    asset is reported as missing.
    """
    await authorize_asset(db, user_id, asset_id)
    result = await db.execute(
        maintenance_queries.select_maintenance_for_asset(maintenance_id, asset_id)
    )
    maintenance = result.scalar_one_or_none()
    if maintenance is None:
        raise NotFoundError(MAINTENANCE_NOT_FOUND)
    return maintenance
