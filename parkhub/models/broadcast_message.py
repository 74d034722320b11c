import enum
import uuid
from datetime import datetime

from sqlalchemy import String, Enum, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from parkhub.core.clock import venue_now
from parkhub.core.database import Base, enum_values


class BroadcastAudience(str, enum.Enum):
    CUSTOMER = "Customer"
    STAFF = "Staff"


class BroadcastStatus(str, enum.Enum):
    PENDING = "Pending"
    SENT = "Sent"


class BroadcastMessage(Base):
    __tablename__ = "broadcast_message"

    broadcast_message_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    target_audience: Mapped[BroadcastAudience] = mapped_column(
        Enum(BroadcastAudience, values_callable=enum_values, native_enum=False, length=16), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False)
    status: Mapped[BroadcastStatus] = mapped_column(
        Enum(BroadcastStatus, values_callable=enum_values, native_enum=False, length=16),
        default=BroadcastStatus.PENDING,
        nullable=False,
    )
