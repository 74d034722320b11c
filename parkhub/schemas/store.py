from datetime import datetime, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class StoreResponse(BaseModel):
    store_id: str
    name: str
    photo: Optional[str] = None
    opening_time: time
    closing_time: time
    location: Optional[str] = None
    status: str

    class Config:
        from_attributes = True


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1)
    photo: Optional[str] = None
    opening_time: time = Field(..., description="HH:MM:SS")
    closing_time: time = Field(..., description="HH:MM:SS")
    location: Optional[str] = None
    status: str = "Open"


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    photo: Optional[str] = None
    opening_time: Optional[time] = None
    closing_time: Optional[time] = None
    location: Optional[str] = None
    status: Optional[str] = None


class SouvenirResponse(BaseModel):
    souvenir_id: str
    name: str
    photo: Optional[str] = None
    price: Decimal
    stock: int
    store_id: str

    class Config:
        from_attributes = True


class SouvenirCreate(BaseModel):
    name: str = Field(..., min_length=1)
    photo: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    store_id: str


class SouvenirUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    photo: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    store_id: Optional[str] = None


class StockUpdate(BaseModel):
    stock: int = Field(..., ge=0)


class SouvenirOrderResponse(BaseModel):
    order_souvenir_id: str
    customer_id: str
    store_id: str
    souvenir_id: str
    quantity: int
    timestamp: datetime

    class Config:
        from_attributes = True


class SouvenirOrderCreate(BaseModel):
    customer_id: str
    store_id: str
    souvenir_id: str
    quantity: int = Field(..., ge=0)
