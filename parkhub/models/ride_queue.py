import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.clock import venue_now
from parkhub.core.database import Base


class RideQueueEntry(Base):
    """One entry is one ticket: the guest pays the ride price on joining the queue."""
    __tablename__ = "ride_queue"

    ride_queue_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    ride_id: Mapped[str] = mapped_column(ForeignKey("ride.ride_id", ondelete="CASCADE"), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False, index=True)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customer.customer_id", ondelete="CASCADE"), nullable=False)
    queue_position: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    ride = relationship("Ride", back_populates="queue_entries")
