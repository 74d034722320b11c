import enum
import uuid

from sqlalchemy import String, Enum
from sqlalchemy.orm import Mapped, mapped_column

from parkhub.core.database import Base, enum_values


class StaffRole(str, enum.Enum):
    CUSTOMER_SERVICE_STAFF = "CustomerServiceStaff"
    CUSTOMER_SERVICE_MANAGER = "CustomerServiceManager"
    LOST_AND_FOUND_STAFF = "LostAndFoundStaff"
    RIDE_STAFF = "RideStaff"
    RIDE_MANAGER = "RideManager"
    MAINTENANCE_STAFF = "MaintenanceStaff"
    MAINTENANCE_MANAGER = "MaintenanceManager"
    FB_SUPERVISOR = "FBSupervisor"
    CHEF = "Chef"
    WAITER = "Waiter"
    SALES_ASSOCIATE = "SalesAssociate"
    RETAIL_MANAGER = "RetailManager"
    COO = "COO"
    CEO = "CEO"
    CFO = "CFO"


class Staff(Base):
    __tablename__ = "staff"

    staff_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[StaffRole] = mapped_column(
        Enum(StaffRole, values_callable=enum_values, native_enum=False, length=32), nullable=False
    )
