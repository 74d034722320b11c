import enum
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Enum, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.database import Base, enum_values


class RideStatus(str, enum.Enum):
    OPERATIONAL = "Operational"
    PENDING = "Pending"
    CLOSED = "Closed"


class Ride(Base):
    __tablename__ = "ride"

    ride_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    status: Mapped[RideStatus] = mapped_column(
        Enum(RideStatus, values_callable=enum_values, native_enum=False, length=32),
        default=RideStatus.OPERATIONAL,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    staff_id: Mapped[str] = mapped_column(ForeignKey("staff.staff_id", ondelete="CASCADE"), nullable=False)
    photo: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    queue_entries = relationship("RideQueueEntry", back_populates="ride")
