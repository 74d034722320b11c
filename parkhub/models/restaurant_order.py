import enum
import uuid
from datetime import datetime

from sqlalchemy import String, Enum, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from parkhub.core.database import Base, enum_values
from parkhub.core.clock import venue_now


class RestaurantOrderStatus(str, enum.Enum):
    PENDING = "Pending"
    COOKING = "Cooking"
    READY_TO_SERVE = "Ready to Serve"
    COMPLETE = "Complete"


class RestaurantOrder(Base):
    __tablename__ = "order_restaurant"

    order_restaurant_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    customer_id: Mapped[str] = mapped_column(ForeignKey("customer.customer_id", ondelete="CASCADE"), nullable=False)
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurant.restaurant_id", ondelete="CASCADE"), nullable=False)
    menu_item_id: Mapped[str] = mapped_column(ForeignKey("menu_item.menu_item_id", ondelete="CASCADE"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False, index=True)
    status: Mapped[RestaurantOrderStatus] = mapped_column(
        Enum(RestaurantOrderStatus, values_callable=enum_values, native_enum=False, length=32),
        default=RestaurantOrderStatus.PENDING,
        nullable=False,
    )
