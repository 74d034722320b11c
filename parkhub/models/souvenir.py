import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Numeric, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.database import Base


class Souvenir(Base):
    __tablename__ = "souvenir"

    souvenir_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    photo: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    store_id: Mapped[str] = mapped_column(ForeignKey("store.store_id", ondelete="CASCADE"), nullable=False)

    store = relationship("Store", back_populates="souvenirs")
