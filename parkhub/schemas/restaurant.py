from datetime import datetime, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from parkhub.models import RestaurantOrderStatus


class RestaurantResponse(BaseModel):
    restaurant_id: str
    name: str
    photo: Optional[str] = None
    opening_time: time
    closing_time: time
    cuisine_type: str
    location: Optional[str] = None
    status: str

    class Config:
        from_attributes = True


class RestaurantCreate(BaseModel):
    name: str = Field(..., min_length=1)
    photo: Optional[str] = None
    opening_time: time = Field(..., description="HH:MM:SS")
    closing_time: time = Field(..., description="HH:MM:SS")
    cuisine_type: str
    location: Optional[str] = None
    status: str = "Open"


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    photo: Optional[str] = None
    opening_time: Optional[time] = None
    closing_time: Optional[time] = None
    cuisine_type: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None


class MenuItemResponse(BaseModel):
    menu_item_id: str
    photo: Optional[str] = None
    name: str
    price: Decimal
    restaurant_id: str

    class Config:
        from_attributes = True


class MenuItemCreate(BaseModel):
    photo: Optional[str] = None
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    restaurant_id: str


class MenuItemUpdate(BaseModel):
    photo: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    restaurant_id: Optional[str] = None


class RestaurantOrderResponse(BaseModel):
    order_restaurant_id: str
    customer_id: str
    restaurant_id: str
    menu_item_id: str
    quantity: int
    timestamp: datetime
    status: RestaurantOrderStatus

    class Config:
        from_attributes = True


class RestaurantOrderCreate(BaseModel):
    customer_id: str
    restaurant_id: str
    menu_item_id: str
    quantity: int = Field(..., ge=0)


class RestaurantOrderStatusUpdate(BaseModel):
    status: RestaurantOrderStatus
