import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from parkhub.core.clock import venue_now
from parkhub.core.database import Base


class SouvenirOrder(Base):
    __tablename__ = "order_souvenir"

    order_souvenir_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    customer_id: Mapped[str] = mapped_column(ForeignKey("customer.customer_id", ondelete="CASCADE"), nullable=False)
    store_id: Mapped[str] = mapped_column(ForeignKey("store.store_id", ondelete="CASCADE"), nullable=False)
    souvenir_id: Mapped[str] = mapped_column(ForeignKey("souvenir.souvenir_id", ondelete="CASCADE"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False, index=True)
