from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireBroadcasts, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.clock import venue_now
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import BroadcastAudience, BroadcastMessage, BroadcastStatus
from parkhub.schemas.broadcast import BroadcastCreate, BroadcastResponse, BroadcastUpdate

router = APIRouter(prefix="/broadcasts", tags=["broadcasts"])
logger = get_logger(__name__)


@router.get("", response_model=list[BroadcastResponse])
async def list_broadcasts(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireBroadcasts),
):
    result = await db.execute(select(BroadcastMessage).order_by(BroadcastMessage.timestamp.desc()))
    return result.scalars().all()


@router.get("/audience/{audience}", response_model=list[BroadcastResponse])
async def list_sent_broadcasts(
    audience: BroadcastAudience,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    """Sent messages for Customer or Staff, newest first."""
    result = await db.execute(
        select(BroadcastMessage)
        .where(
            BroadcastMessage.target_audience == audience,
            BroadcastMessage.status == BroadcastStatus.SENT,
        )
        .order_by(BroadcastMessage.timestamp.desc())
    )
    return result.scalars().all()


@router.get("/{broadcast_id}", response_model=BroadcastResponse)
async def get_broadcast(
    broadcast_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireBroadcasts),
):
    return await get_or_404(
        db, BroadcastMessage, BroadcastMessage.broadcast_message_id, broadcast_id, "Broadcast message not found"
    )


@router.post("", response_model=BroadcastResponse, status_code=201)
async def create_broadcast(
    data: BroadcastCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireBroadcasts),
):
    message = BroadcastMessage(**data.model_dump(), timestamp=venue_now())
    db.add(message)
    await db.flush()
    await db.refresh(message)
    logger.info("Broadcast %s created for %s", message.broadcast_message_id, message.target_audience.value)
    return message


@router.patch("/{broadcast_id}", response_model=BroadcastResponse)
async def update_broadcast(
    broadcast_id: str,
    data: BroadcastUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireBroadcasts),
):
    message = await get_or_404(
        db, BroadcastMessage, BroadcastMessage.broadcast_message_id, broadcast_id, "Broadcast message not found"
    )
    apply_update(message, data, required=("target_audience", "content", "status"))
    await db.flush()
    await db.refresh(message)
    return message


@router.delete("/{broadcast_id}", status_code=204)
async def delete_broadcast(
    broadcast_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireBroadcasts),
):
    await delete_or_404(
        db, BroadcastMessage, BroadcastMessage.broadcast_message_id, broadcast_id, "Broadcast message not found"
    )
    logger.info("Broadcast deleted: %s", broadcast_id)
