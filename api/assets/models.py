from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.patch import UNSET, PatchMixin


class AssetCreate(BaseModel):
    name: str | None = None
    description: str | None = None


class AssetUpdate(BaseModel):
    """Partial update; keys left out of the body are left unchanged."""
    name: str | None = None
    description: str | None = None


@dataclass
class AssetPatch(PatchMixin):
    name: Any = UNSET
    description: Any = UNSET


class AssetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class AssetCreatedResponse(BaseModel):
    message: str
    asset: AssetRead


class AssetListResponse(BaseModel):
    assets: list[AssetRead]
