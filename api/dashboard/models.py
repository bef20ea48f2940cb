# api/dashboard/models.py
from api.maintenances.models import MaintenanceRead
from pydantic import BaseModel


class DueMaintenance(MaintenanceRead):
    """A pending maintenance record with its asset's display fields."""
    asset_name: str
    asset_description: str | None = None


class DueSummaryResponse(BaseModel):
    horizon_days: int
    maintenances: list[DueMaintenance]
