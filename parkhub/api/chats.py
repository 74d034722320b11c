"""Chats: guest <-> customer service, staff <-> staff."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireCustomerService, RequireStaff, UserInfo, ensure_customer_or_resource
from parkhub.api.crud import dump_all, get_or_404
from parkhub.config import settings
from parkhub.core.cache import (
    CUSTOMER_SERVICE_CHATS_KEY,
    Cache,
    chat_messages_key,
    get_cache,
    user_chats_key,
)
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import Resource, can_access_resource
from parkhub.models import CUSTOMER_SERVICE_CHAT_NAME, Chat, Customer
from parkhub.schemas.chat import (
    ChatCreate,
    ChatMemberCreate,
    ChatMemberResponse,
    ChatResponse,
    CustomerServiceChat,
    MessageCreate,
    MessageResponse,
)
from parkhub.services import chat_service

router = APIRouter(prefix="/chats", tags=["chats"])
logger = get_logger(__name__)


def _ensure_self_or_support(current_user: UserInfo, user_id: str) -> None:
    if current_user.id == user_id:
        return
    if current_user.is_customer or not can_access_resource(current_user.role, Resource.CUSTOMER_SERVICE):
        raise HTTPException(status_code=403, detail="Insufficient permissions")


async def _chat_for(db: AsyncSession, current_user: UserInfo, chat_id: str) -> Chat:
    """Chat visible to the caller: a member, or customer service staff."""
    chat = await get_or_404(db, Chat, Chat.chat_id, chat_id, "Chat not found")
    if current_user.is_customer or not can_access_resource(current_user.role, Resource.CUSTOMER_SERVICE):
        if not await chat_service.is_member(db, chat_id, current_user.id):
            raise HTTPException(status_code=403, detail="Not a member of this chat")
    return chat


async def _commit_and_invalidate(db: AsyncSession, cache: Cache, chat: Chat, user_ids) -> None:
    keys = [chat_messages_key(chat.chat_id)] + [user_chats_key(u) for u in user_ids]
    if chat.name == CUSTOMER_SERVICE_CHAT_NAME:
        keys.append(CUSTOMER_SERVICE_CHATS_KEY)
    await db.commit()
    await cache.delete(*keys)


@router.get("/user/{user_id}", response_model=list[ChatResponse])
async def list_user_chats(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    _ensure_self_or_support(current_user, user_id)
    key = user_chats_key(user_id)
    cached = await cache.get(key)
    if cached is not None:
        return cached
    chats = dump_all(ChatResponse, await chat_service.chats_for_user(db, user_id))
    await cache.set(key, chats)
    return chats


@router.get("/customer-service", response_model=list[CustomerServiceChat])
async def list_customer_service_chats(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireCustomerService),
):
    """Every guest's customer service chat with the guest's name."""
    cached = await cache.get(CUSTOMER_SERVICE_CHATS_KEY)
    if cached is not None:
        return cached
    chats = [c.model_dump(mode="json") for c in await chat_service.customer_service_chats(db)]
    await cache.set(CUSTOMER_SERVICE_CHATS_KEY, chats)
    return chats


@router.post("/customer-service/{customer_id}", response_model=ChatResponse)
async def get_customer_service_chat(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    """The guest's customer service chat, created on first use."""
    ensure_customer_or_resource(current_user, customer_id, Resource.CUSTOMER_SERVICE)
    await get_or_404(db, Customer, Customer.customer_id, customer_id, "Customer not found")
    chat, created = await chat_service.get_or_create_customer_service_chat(db, customer_id)
    if created:
        await db.commit()
        await cache.delete(user_chats_key(customer_id), CUSTOMER_SERVICE_CHATS_KEY)
    return chat


@router.post("", response_model=ChatResponse, status_code=201)
async def create_chat(
    data: ChatCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStaff),
):
    chat = await chat_service.create_chat(db, data.name.strip(), data.member_ids)
    await _commit_and_invalidate(db, cache, chat, data.member_ids)
    return chat


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    return await _chat_for(db, current_user, chat_id)


@router.get("/{chat_id}/messages", response_model=list[MessageResponse])
async def get_messages(
    chat_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    """Messages oldest first, each with the sender's display name."""
    await _chat_for(db, current_user, chat_id)
    key = chat_messages_key(chat_id)
    cached = await cache.get(key)
    if cached is not None:
        return cached
    messages = [m.model_dump(mode="json") for m in await chat_service.messages_with_senders(db, chat_id)]
    await cache.set(key, messages, ttl=settings.messages_cache_ttl_seconds)
    return messages


@router.post("/{chat_id}/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    chat_id: str,
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    if data.sender_id != current_user.id:
        raise HTTPException(status_code=403, detail="Messages can only be sent as yourself")
    chat = await _chat_for(db, current_user, chat_id)
    message = await chat_service.send_message(db, chat, data.sender_id, data.text)
    members = await chat_service.member_ids(db, chat_id)
    await _commit_and_invalidate(db, cache, chat, set(members) | {data.sender_id})
    names = await chat_service.display_names(db, [data.sender_id])
    return MessageResponse(
        message_id=message.message_id,
        chat_id=message.chat_id,
        sender_id=message.sender_id,
        sender_name=names.get(message.sender_id, chat_service.UNKNOWN_SENDER),
        text=message.text,
        timestamp=message.timestamp,
    )


@router.get("/{chat_id}/members", response_model=list[ChatMemberResponse])
async def list_members(
    chat_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    await _chat_for(db, current_user, chat_id)
    return await chat_service.members(db, chat_id)


@router.post("/{chat_id}/members", response_model=ChatMemberResponse, status_code=201)
async def add_member(
    chat_id: str,
    data: ChatMemberCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStaff),
):
    chat = await get_or_404(db, Chat, Chat.chat_id, chat_id, "Chat not found")
    if await chat_service.is_member(db, chat_id, data.user_id):
        raise HTTPException(status_code=409, detail="User is already a member of this chat")
    member = await chat_service.add_member(db, chat_id, data.user_id)
    await _commit_and_invalidate(db, cache, chat, [data.user_id])
    logger.info("User %s added to chat %s", data.user_id, chat_id)
    return member
