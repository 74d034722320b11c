from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from parkhub.models import BroadcastAudience, BroadcastStatus


class BroadcastResponse(BaseModel):
    broadcast_message_id: str
    target_audience: BroadcastAudience
    content: str
    timestamp: datetime
    status: BroadcastStatus

    class Config:
        from_attributes = True


class BroadcastCreate(BaseModel):
    target_audience: BroadcastAudience
    content: str = Field(..., min_length=1)
    status: BroadcastStatus = BroadcastStatus.PENDING


class BroadcastUpdate(BaseModel):
    target_audience: Optional[BroadcastAudience] = None
    content: Optional[str] = Field(default=None, min_length=1)
    status: Optional[BroadcastStatus] = None
