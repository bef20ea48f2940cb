"""
SQLAlchemy query builders for maintenance records.

Writes filter on (maintenance id, asset id) and on the owning user through a
sub-select on assets, so the ownership chain is checked inside the statement.
"""
from typing import Any

from sqlalchemy import select, update, delete

from db_models.asset import Asset
from db_models.maintenance import Maintenance


def owned_asset_ids(user_id: int):
    """Sub-select of asset ids belonging to `user_id`."""
    return select(Asset.id).where(Asset.user_id == user_id)


def select_maintenances_for_asset(asset_id: int):
    """Select an asset's maintenance log, most recent first."""
    return (
        select(Maintenance)
        .where(Maintenance.asset_id == asset_id)
        .order_by(Maintenance.created_at.desc(), Maintenance.id.desc())
    )


def select_maintenance_for_asset(maintenance_id: int, asset_id: int):
    """Select one maintenance record by the (id, asset_id) pair."""
    return select(Maintenance).where(
        Maintenance.id == maintenance_id,
        Maintenance.asset_id == asset_id,
    )


def update_maintenance_for_owner(
    maintenance_id: int,
    asset_id: int,
    user_id: int,
    values: dict[str, Any],
    *guards,
):
    """
    UPDATE ... WHERE id AND asset_id AND asset owned by user [AND guards]
    RETURNING the refreshed row.
    """
    return (
        update(Maintenance)
        .where(
            Maintenance.id == maintenance_id,
            Maintenance.asset_id == asset_id,
            Maintenance.asset_id.in_(owned_asset_ids(user_id)),
            *guards,
        )
        .values(**values)
        .returning(Maintenance)
        .execution_options(synchronize_session=False, populate_existing=True)
    )


def delete_maintenance_for_owner(maintenance_id: int, asset_id: int, user_id: int):
    """DELETE ... WHERE id AND asset_id AND asset owned by user RETURNING id."""
    return (
        delete(Maintenance)
        .where(
            Maintenance.id == maintenance_id,
            Maintenance.asset_id == asset_id,
            Maintenance.asset_id.in_(owned_asset_ids(user_id)),
        )
        .returning(Maintenance.id)
        .execution_options(synchronize_session=False)
    )
