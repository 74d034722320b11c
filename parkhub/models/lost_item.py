import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Enum, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from parkhub.core.clock import venue_now
from parkhub.core.database import Base, enum_values


class LostItemStatus(str, enum.Enum):
    RETURNED_TO_OWNER = "Returned to Owner"
    FOUND = "Found"
    MISSING = "Missing"


class LostItemLog(Base):
    __tablename__ = "lost_and_found_items_log"

    log_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(128), nullable=False)
    color: Mapped[str] = mapped_column(String(64), nullable=False)
    last_seen_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    finder: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    owner: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    found_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False)
    status: Mapped[LostItemStatus] = mapped_column(
        Enum(LostItemStatus, values_callable=enum_values, native_enum=False, length=32), nullable=False
    )
