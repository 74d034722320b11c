from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from parkhub.models import RideStatus


class RideResponse(BaseModel):
    ride_id: str
    status: RideStatus
    name: str
    price: Decimal
    location: str
    staff_id: str
    photo: Optional[str] = None

    class Config:
        from_attributes = True


class RideCreate(BaseModel):
    status: RideStatus = RideStatus.OPERATIONAL
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    location: str
    staff_id: str
    photo: Optional[str] = None


class RideUpdate(BaseModel):
    status: Optional[RideStatus] = None
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    location: Optional[str] = None
    staff_id: Optional[str] = None
    photo: Optional[str] = None


class RideQueueResponse(BaseModel):
    ride_queue_id: str
    ride_id: str
    customer_id: str
    joined_at: datetime
    queue_position: Decimal

    class Config:
        from_attributes = True


class RideQueueCreate(BaseModel):
    ride_id: str
    customer_id: str
    queue_position: Decimal = Field(..., ge=0)


class QueuePositionUpdate(BaseModel):
    queue_position: Decimal = Field(..., ge=0)
