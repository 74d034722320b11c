import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.database import Base


class MenuItem(Base):
    __tablename__ = "menu_item"

    menu_item_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    photo: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurant.restaurant_id", ondelete="CASCADE"), nullable=False)

    restaurant = relationship("Restaurant", back_populates="menu_items")
