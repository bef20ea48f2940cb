from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from core.patch import UNSET, PatchMixin


class _MaintenanceFields(BaseModel):
    service_description: str | None = None
    completion_date: date | None = None
    next_due_date: date | None = None
    notes: str | None = None
    is_completed: bool | None = None

    @field_validator("completion_date", "next_due_date", "notes", mode="before")
    @classmethod
    def blank_is_null(cls, value: Any) -> Any:
        # Cleared form fields arrive as "", which is stored as NULL.
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MaintenanceCreate(_MaintenanceFields):
    asset_id: int | None = None


class MaintenanceUpdate(_MaintenanceFields):
    """Partial update; keys left out of the body are left unchanged."""
    pass


@dataclass
class MaintenancePatch(PatchMixin):
    service_description: Any = UNSET
    completion_date: Any = UNSET
    next_due_date: Any = UNSET
    notes: Any = UNSET
    is_completed: Any = UNSET


class MaintenanceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    service_description: str
    completion_date: date | None = None
    next_due_date: date | None = None
    notes: str | None = None
    is_completed: bool
    created_at: datetime
    updated_at: datetime | None = None


class MaintenanceCreatedResponse(BaseModel):
    message: str
    maintenance: MaintenanceRead


class MaintenanceDetailResponse(BaseModel):
    maintenance: MaintenanceRead


class MaintenanceListResponse(BaseModel):
    maintenances: list[MaintenanceRead]
