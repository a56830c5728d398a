# Import every model so Base.metadata is complete for create_all and Alembic
from db_models.user import User
from db_models.asset import Asset
from db_models.maintenance_record import MaintenanceRecord

__all__ = ["User", "Asset", "MaintenanceRecord"]
