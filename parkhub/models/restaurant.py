import uuid
from datetime import time
from typing import Optional

from sqlalchemy import String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.database import Base


class Restaurant(Base):
    __tablename__ = "restaurant"

    restaurant_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    photo: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    opening_time: Mapped[time] = mapped_column(Time, nullable=False)
    closing_time: Mapped[time] = mapped_column(Time, nullable=False)
    cuisine_type: Mapped[str] = mapped_column(String(128), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(64), default="Open", nullable=False)

    menu_items = relationship("MenuItem", back_populates="restaurant")
