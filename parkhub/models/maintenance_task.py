import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Enum, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.database import Base, enum_values


class MaintenanceStatus(str, enum.Enum):
    PENDING = "Pending"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# A staff member may hold at most one task in these statuses.
ACTIVE_MAINTENANCE_STATUSES = (MaintenanceStatus.PENDING, MaintenanceStatus.ONGOING)


class MaintenanceTask(Base):
    __tablename__ = "maintenance_schedule"

    maintenance_task_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    ride_id: Mapped[str] = mapped_column(ForeignKey("ride.ride_id", ondelete="CASCADE"), nullable=False)
    staff_id: Mapped[str] = mapped_column(ForeignKey("staff.staff_id", ondelete="CASCADE"), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[MaintenanceStatus] = mapped_column(
        Enum(MaintenanceStatus, values_callable=enum_values, native_enum=False, length=32),
        default=MaintenanceStatus.PENDING,
        nullable=False,
    )

    ride = relationship("Ride")
    staff = relationship("Staff")
