from devkitchen.hub.db.models.real_estate import RealEstateRecord
from devkitchen.hub.db.models.user import RoleRecord, UserRecord

__all__ = ["RealEstateRecord", "RoleRecord", "UserRecord"]
