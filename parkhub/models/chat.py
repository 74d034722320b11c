"""Internal chat: chats, their members (customers or staff) and messages."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parkhub.core.clock import venue_now
from parkhub.core.database import Base

CUSTOMER_SERVICE_CHAT_NAME = "Customer Service"


class Chat(Base):
    __tablename__ = "chat"

    chat_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    last_message_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_message_timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False)

    members = relationship("ChatMember", back_populates="chat")
    messages = relationship("Message", back_populates="chat")


class ChatMember(Base):
    __tablename__ = "chat_member"

    chat_member_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    chat_id: Mapped[str] = mapped_column(ForeignKey("chat.chat_id", ondelete="CASCADE"), nullable=False, index=True)
    # customer_id or staff_id
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False)

    chat = relationship("Chat", back_populates="members")


class Message(Base):
    __tablename__ = "message"

    message_id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    chat_id: Mapped[str] = mapped_column(ForeignKey("chat.chat_id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id: Mapped[str] = mapped_column(String(36), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=venue_now, nullable=False)

    chat = relationship("Chat", back_populates="messages")
