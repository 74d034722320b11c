from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from parkhub.models import LostItemStatus


class LostItemResponse(BaseModel):
    log_id: str
    image: Optional[str] = None
    name: str
    type: str
    color: str
    last_seen_location: Optional[str] = None
    finder: Optional[str] = None
    owner: Optional[str] = None
    found_location: Optional[str] = None
    timestamp: datetime
    status: LostItemStatus

    class Config:
        from_attributes = True


class LostItemCreate(BaseModel):
    image: Optional[str] = None
    name: str = Field(..., min_length=1)
    type: str
    color: str
    last_seen_location: Optional[str] = None
    finder: Optional[str] = None
    owner: Optional[str] = None
    found_location: Optional[str] = None
    status: LostItemStatus


class LostItemUpdate(BaseModel):
    image: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = None
    color: Optional[str] = None
    last_seen_location: Optional[str] = None
    finder: Optional[str] = None
    owner: Optional[str] = None
    found_location: Optional[str] = None
    status: Optional[LostItemStatus] = None
