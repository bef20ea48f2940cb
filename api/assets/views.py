# api/assets/views.py
"""
Asset endpoints. Every route is scoped to the authenticated owner.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from core.errors import NotFoundError
from core.ownership import ASSET_NOT_FOUND
from .models import (
    AssetCreate,
    AssetCreatedResponse,
    AssetListResponse,
    AssetPatch,
    AssetRead,
    AssetUpdate,
)
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post(
    "",
    response_model=AssetCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetCreatedResponse:
    asset = await db_manager.create_asset(
        db,
        user_id=current_user.id,
        name=payload.name,
        description=payload.description,
    )
    return AssetCreatedResponse(
        message="Asset created successfully.",
        asset=AssetRead.model_validate(asset),
    )


@router.get("", response_model=AssetListResponse, summary="List my assets")
async def list_assets_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetListResponse:
    """List the current user's assets, ordered by name."""
    assets = await db_manager.list_assets(db, current_user.id)
    return AssetListResponse(assets=[AssetRead.model_validate(a) for a in assets])


@router.get("/{asset_id}", response_model=AssetRead, summary="Get an asset")
async def get_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    asset = await db_manager.get_asset(db, current_user.id, asset_id)
    return AssetRead.model_validate(asset)


@router.put("/{asset_id}", response_model=AssetRead, summary="Update an asset")
async def update_asset_endpoint(
    asset_id: int,
    payload: AssetUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """Partial update: only the fields present in the body change."""
    asset = await db_manager.update_asset(
        db,
        current_user.id,
        asset_id,
        AssetPatch.from_model(payload),
    )
    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an asset and its maintenance log",
)
async def delete_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    deleted = await db_manager.delete_asset(db, current_user.id, asset_id)
    if not deleted:
        raise NotFoundError(ASSET_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
