from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireLostAndFound, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, dump_all, get_or_404
from parkhub.core.cache import LOST_AND_FOUND_KEY, Cache, get_cache
from parkhub.core.clock import venue_now
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import LostItemLog
from parkhub.schemas.lost_item import LostItemCreate, LostItemResponse, LostItemUpdate

router = APIRouter(prefix="/lost-and-found", tags=["lost-and-found"])
logger = get_logger(__name__)


@router.get("", response_model=list[LostItemResponse])
async def list_logs(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireLostAndFound),
):
    """Newest reports first."""
    cached = await cache.get(LOST_AND_FOUND_KEY)
    if cached is not None:
        return cached
    result = await db.execute(select(LostItemLog).order_by(LostItemLog.timestamp.desc(), LostItemLog.log_id))
    logs = dump_all(LostItemResponse, result.scalars().all())
    await cache.set(LOST_AND_FOUND_KEY, logs)
    return logs


@router.post("", response_model=LostItemResponse, status_code=201)
async def create_log(
    data: LostItemCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireLostAndFound),
):
    log = LostItemLog(**data.model_dump(), timestamp=venue_now())
    db.add(log)
    await db.flush()
    await db.refresh(log)
    await db.commit()
    await cache.delete(LOST_AND_FOUND_KEY)
    logger.info("Lost item logged: %s (%s)", log.log_id, log.status.value)
    return log


@router.patch("/{log_id}", response_model=LostItemResponse)
async def update_log(
    log_id: str,
    data: LostItemUpdate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireLostAndFound),
):
    log = await get_or_404(db, LostItemLog, LostItemLog.log_id, log_id, "Lost item log not found")
    apply_update(log, data, required=("name", "type", "color", "status"))
    await db.flush()
    await db.refresh(log)
    await db.commit()
    await cache.delete(LOST_AND_FOUND_KEY)
    return log


@router.delete("/{log_id}", status_code=204)
async def delete_log(
    log_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireLostAndFound),
):
    await delete_or_404(db, LostItemLog, LostItemLog.log_id, log_id, "Lost item log not found")
    await db.commit()
    await cache.delete(LOST_AND_FOUND_KEY)
    logger.info("Lost item log deleted: %s", log_id)
