# Import every model so Base.metadata knows all tables.
from .user import User
from .asset import Asset
from .maintenance import Maintenance

__all__ = ["User", "Asset", "Maintenance"]
