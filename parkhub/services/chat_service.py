"""
Chats between guests and staff.
Members are referenced by plain user id (customer_id or staff_id), so sender
and customer names are resolved against both tables.
"""
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.clock import venue_now
from parkhub.core.logging_config import get_logger
from parkhub.models import CUSTOMER_SERVICE_CHAT_NAME, Chat, ChatMember, Customer, Message, Staff
from parkhub.schemas.chat import CustomerServiceChat, MessageResponse

logger = get_logger(__name__)

UNKNOWN_SENDER = "Unknown Sender"
UNKNOWN_CUSTOMER = "Unknown Customer"


async def chats_for_user(db: AsyncSession, user_id: str) -> List[Chat]:
    result = await db.execute(
        select(Chat)
        .join(ChatMember, ChatMember.chat_id == Chat.chat_id)
        .where(ChatMember.user_id == user_id)
        .order_by(Chat.created_at, Chat.chat_id)
    )
    return list(result.scalars().unique().all())


async def members(db: AsyncSession, chat_id: str) -> List[ChatMember]:
    result = await db.execute(
        select(ChatMember).where(ChatMember.chat_id == chat_id).order_by(ChatMember.joined_at)
    )
    return list(result.scalars().all())


async def member_ids(db: AsyncSession, chat_id: str) -> List[str]:
    result = await db.execute(select(ChatMember.user_id).where(ChatMember.chat_id == chat_id))
    return list(result.scalars().all())


async def is_member(db: AsyncSession, chat_id: str, user_id: str) -> bool:
    r = await db.execute(
        select(ChatMember.chat_member_id).where(ChatMember.chat_id == chat_id, ChatMember.user_id == user_id)
    )
    return r.first() is not None


async def create_chat(db: AsyncSession, name: str, members: Iterable[str] = ()) -> Chat:
    chat = Chat(name=name, created_at=venue_now())
    db.add(chat)
    await db.flush()
    for user_id in dict.fromkeys(members):
        db.add(ChatMember(chat_id=chat.chat_id, user_id=user_id, joined_at=venue_now()))
    await db.flush()
    await db.refresh(chat)
    logger.info("Chat created: %s (%s)", chat.chat_id, name)
    return chat


async def add_member(db: AsyncSession, chat_id: str, user_id: str) -> ChatMember:
    member = ChatMember(chat_id=chat_id, user_id=user_id, joined_at=venue_now())
    db.add(member)
    await db.flush()
    await db.refresh(member)
    return member


async def display_names(db: AsyncSession, user_ids: Iterable[str]) -> Dict[str, str]:
    """user_id -> customer name, else staff name. Unknown ids are left out."""
    ids = set(user_ids)
    if not ids:
        return {}
    names: Dict[str, str] = {}
    r = await db.execute(select(Customer.customer_id, Customer.name).where(Customer.customer_id.in_(ids)))
    names.update({row.customer_id: row.name for row in r.all()})
    rest = ids - names.keys()
    if rest:
        r = await db.execute(select(Staff.staff_id, Staff.name).where(Staff.staff_id.in_(rest)))
        names.update({row.staff_id: row.name for row in r.all()})
    return names


async def messages_with_senders(db: AsyncSession, chat_id: str) -> List[MessageResponse]:
    result = await db.execute(
        select(Message).where(Message.chat_id == chat_id).order_by(Message.timestamp, Message.message_id)
    )
    messages = result.scalars().all()
    names = await display_names(db, (m.sender_id for m in messages))
    return [
        MessageResponse(
            message_id=m.message_id,
            chat_id=m.chat_id,
            sender_id=m.sender_id,
            sender_name=names.get(m.sender_id, UNKNOWN_SENDER),
            text=m.text,
            timestamp=m.timestamp,
        )
        for m in messages
    ]


async def send_message(db: AsyncSession, chat: Chat, sender_id: str, text: str) -> Message:
    """Store the message and make it the chat's last message."""
    now = venue_now()
    message = Message(chat_id=chat.chat_id, sender_id=sender_id, text=text, timestamp=now)
    db.add(message)
    chat.last_message_text = text
    chat.last_message_timestamp = now
    await db.flush()
    await db.refresh(message)
    return message


async def get_or_create_customer_service_chat(db: AsyncSession, customer_id: str) -> Tuple[Chat, bool]:
    """The guest's "Customer Service" chat; the flag tells whether it was just created."""
    result = await db.execute(
        select(Chat)
        .join(ChatMember, ChatMember.chat_id == Chat.chat_id)
        .where(ChatMember.user_id == customer_id, Chat.name == CUSTOMER_SERVICE_CHAT_NAME)
        .order_by(Chat.created_at)
        .limit(1)
    )
    chat = result.scalar_one_or_none()
    if chat is not None:
        return chat, False
    return await create_chat(db, CUSTOMER_SERVICE_CHAT_NAME, [customer_id]), True


async def customer_service_chats(db: AsyncSession) -> List[CustomerServiceChat]:
    """All customer service chats, oldest first, with the guest's name."""
    result = await db.execute(
        select(Chat).where(Chat.name == CUSTOMER_SERVICE_CHAT_NAME).order_by(Chat.created_at, Chat.chat_id)
    )
    chats = result.scalars().all()
    if not chats:
        return []
    r = await db.execute(
        select(ChatMember.chat_id, Customer.customer_id, Customer.name)
        .join(Customer, Customer.customer_id == ChatMember.user_id)
        .where(ChatMember.chat_id.in_([c.chat_id for c in chats]))
        .order_by(ChatMember.joined_at)
    )
    customers: Dict[str, tuple] = {}
    for row in r.all():
        customers.setdefault(row.chat_id, (row.customer_id, row.name))
    out = []
    for chat in chats:
        customer_id, customer_name = customers.get(chat.chat_id, (None, UNKNOWN_CUSTOMER))
        out.append(
            CustomerServiceChat(
                chat_id=chat.chat_id,
                customer_id=customer_id,
                customer_name=customer_name,
                last_message_text=chat.last_message_text,
                last_message_timestamp=chat.last_message_timestamp,
            )
        )
    return out

