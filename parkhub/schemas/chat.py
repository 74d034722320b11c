from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    chat_id: str
    name: str
    last_message_text: Optional[str] = None
    last_message_timestamp: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ChatCreate(BaseModel):
    name: str = Field(..., min_length=1)
    # Members added together with the chat (customer or staff ids).
    member_ids: List[str] = []


class ChatMemberResponse(BaseModel):
    chat_member_id: str
    chat_id: str
    user_id: str
    joined_at: datetime

    class Config:
        from_attributes = True


class ChatMemberCreate(BaseModel):
    user_id: str


class MessageResponse(BaseModel):
    message_id: str
    chat_id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: datetime


class MessageCreate(BaseModel):
    sender_id: str
    text: str = Field(..., min_length=1)


class CustomerServiceChat(BaseModel):
    """Customer service chat as listed for staff."""
    chat_id: str
    customer_id: Optional[str] = None
    customer_name: str
    last_message_text: Optional[str] = None
    last_message_timestamp: Optional[datetime] = None
