# api/maintenances/views.py
"""
Maintenance log endpoints, nested under the owning asset.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from core.errors import NotFoundError
from core.ownership import MAINTENANCE_NOT_FOUND
from .models import (
    MaintenanceCreate,
    MaintenanceCreatedResponse,
    MaintenanceDetailResponse,
    MaintenanceListResponse,
    MaintenancePatch,
    MaintenanceRead,
    MaintenanceUpdate,
)
from . import db_manager

router = APIRouter(prefix="/maintenances", tags=["maintenances"])


@router.post(
    "",
    response_model=MaintenanceCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a maintenance event",
)
async def create_maintenance_endpoint(
    payload: MaintenanceCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceCreatedResponse:
    """
    Create a maintenance record for one of the user's assets.
    `completion_date` is required when `is_completed` is true.
    """
    maintenance = await db_manager.create_maintenance(
        db,
        current_user.id,
        payload.asset_id,
        payload.service_description,
        completion_date=payload.completion_date,
        next_due_date=payload.next_due_date,
        notes=payload.notes,
        is_completed=payload.is_completed,
    )
    return MaintenanceCreatedResponse(
        message="Maintenance log created successfully.",
        maintenance=MaintenanceRead.model_validate(maintenance),
    )


@router.get(
    "/asset/{asset_id}",
    response_model=MaintenanceListResponse,
    summary="List an asset's maintenance log",
)
async def list_maintenances_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceListResponse:
    maintenances = await db_manager.list_maintenances_for_owner(db, current_user.id, asset_id)
    return MaintenanceListResponse(
        maintenances=[MaintenanceRead.model_validate(m) for m in maintenances]
    )


@router.get(
    "/asset/{asset_id}/{maintenance_id}",
    response_model=MaintenanceDetailResponse,
    summary="Get a maintenance record",
)
async def get_maintenance_endpoint(
    asset_id: int,
    maintenance_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceDetailResponse:
    maintenance = await db_manager.get_maintenance(db, current_user.id, asset_id, maintenance_id)
    return MaintenanceDetailResponse(maintenance=MaintenanceRead.model_validate(maintenance))


@router.put(
    "/asset/{asset_id}/{maintenance_id}",
    response_model=MaintenanceRead,
    summary="Update a maintenance record",
)
async def update_maintenance_endpoint(
    asset_id: int,
    maintenance_id: int,
    payload: MaintenanceUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenanceRead:
    """
    Partial update. An empty string for a date clears it; leaving the key out
    keeps the stored value.
    """
    maintenance = await db_manager.update_maintenance(
        db,
        current_user.id,
        asset_id,
        maintenance_id,
        MaintenancePatch.from_model(payload),
    )
    return MaintenanceRead.model_validate(maintenance)


@router.delete(
    "/asset/{asset_id}/{maintenance_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a maintenance record",
)
async def delete_maintenance_endpoint(
    asset_id: int,
    maintenance_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    deleted = await db_manager.delete_maintenance(db, current_user.id, asset_id, maintenance_id)
    if not deleted:
        raise NotFoundError(MAINTENANCE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
