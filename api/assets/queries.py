"""
SQLAlchemy query builders for asset operations.

Every statement that touches a single asset filters on the owner as well as the
id, so ownership and the read/write happen in one round trip.
"""
from typing import Any

from sqlalchemy import select, update, delete

from db_models.asset import Asset


def select_assets_for_user(user_id: int):
    """Select all assets owned by a user, alphabetically."""
    return (
        select(Asset)
        .where(Asset.user_id == user_id)
        .order_by(Asset.name.asc(), Asset.id.asc())
    )


def select_asset_for_user(asset_id: int, user_id: int):
    """Select one asset by id, only if `user_id` owns it."""
    return select(Asset).where(Asset.id == asset_id, Asset.user_id == user_id)


def update_asset_for_user(asset_id: int, user_id: int, values: dict[str, Any]):
    """UPDATE ... WHERE id AND user_id RETURNING the refreshed row."""
    return (
        update(Asset)
        .where(Asset.id == asset_id, Asset.user_id == user_id)
        .values(**values)
        .returning(Asset)
        .execution_options(synchronize_session=False, populate_existing=True)
    )


def delete_asset_for_user(asset_id: int, user_id: int):
    """DELETE ... WHERE id AND user_id RETURNING id (maintenances cascade in the DB)."""
    return (
        delete(Asset)
        .where(Asset.id == asset_id, Asset.user_id == user_id)
        .returning(Asset.id)
        .execution_options(synchronize_session=False)
    )
