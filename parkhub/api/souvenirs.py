from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireStores, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, dump_all, get_or_404
from parkhub.core.cache import SOUVENIR_ORDERS_KEY, SOUVENIRS_ALL_KEY, Cache, get_cache, souvenirs_store_key
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import Souvenir, Store
from parkhub.schemas.store import SouvenirCreate, SouvenirResponse, SouvenirUpdate, StockUpdate

router = APIRouter(prefix="/souvenirs", tags=["souvenirs"])
logger = get_logger(__name__)


async def _commit_and_invalidate(
    db: AsyncSession, cache: Cache, *store_ids: Optional[str], extra: tuple[str, ...] = ()
) -> None:
    keys = [SOUVENIRS_ALL_KEY] + [souvenirs_store_key(s) for s in store_ids if s]
    await db.commit()
    await cache.delete(*keys, *extra)


@router.get("", response_model=list[SouvenirResponse])
async def list_souvenirs(
    store_id: Optional[str] = Query(None, description="Only souvenirs of this store"),
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    key = souvenirs_store_key(store_id) if store_id else SOUVENIRS_ALL_KEY
    cached = await cache.get(key)
    if cached is not None:
        return cached
    stmt = select(Souvenir).order_by(Souvenir.name, Souvenir.souvenir_id)
    if store_id:
        stmt = stmt.where(Souvenir.store_id == store_id)
    result = await db.execute(stmt)
    souvenirs = dump_all(SouvenirResponse, result.scalars().all())
    await cache.set(key, souvenirs)
    return souvenirs


@router.get("/{souvenir_id}", response_model=SouvenirResponse)
async def get_souvenir(
    souvenir_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    return await get_or_404(db, Souvenir, Souvenir.souvenir_id, souvenir_id, "Souvenir not found")


@router.post("", response_model=SouvenirResponse, status_code=201)
async def create_souvenir(
    data: SouvenirCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    await get_or_404(db, Store, Store.store_id, data.store_id, "Store not found")
    souvenir = Souvenir(**data.model_dump())
    db.add(souvenir)
    await db.flush()
    await db.refresh(souvenir)
    await _commit_and_invalidate(db, cache, souvenir.store_id)
    logger.info("Souvenir created: %s (store %s)", souvenir.souvenir_id, souvenir.store_id)
    return souvenir


@router.patch("/{souvenir_id}", response_model=SouvenirResponse)
async def update_souvenir(
    souvenir_id: str,
    data: SouvenirUpdate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    souvenir = await get_or_404(db, Souvenir, Souvenir.souvenir_id, souvenir_id, "Souvenir not found")
    old_store_id = souvenir.store_id
    if data.store_id is not None:
        await get_or_404(db, Store, Store.store_id, data.store_id, "Store not found")
    apply_update(souvenir, data, required=("name", "price", "stock", "store_id"))
    await db.flush()
    await db.refresh(souvenir)
    await _commit_and_invalidate(db, cache, old_store_id, souvenir.store_id)
    return souvenir


@router.patch("/{souvenir_id}/stock", response_model=SouvenirResponse)
async def update_souvenir_stock(
    souvenir_id: str,
    body: StockUpdate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    souvenir = await get_or_404(db, Souvenir, Souvenir.souvenir_id, souvenir_id, "Souvenir not found")
    souvenir.stock = body.stock
    await db.flush()
    await db.refresh(souvenir)
    await _commit_and_invalidate(db, cache, souvenir.store_id)
    return souvenir


@router.delete("/{souvenir_id}", status_code=204)
async def delete_souvenir(
    souvenir_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    souvenir = await get_or_404(db, Souvenir, Souvenir.souvenir_id, souvenir_id, "Souvenir not found")
    store_id = souvenir.store_id
    await delete_or_404(db, Souvenir, Souvenir.souvenir_id, souvenir_id, "Souvenir not found")
    # its orders are removed with it
    await _commit_and_invalidate(db, cache, store_id, extra=(SOUVENIR_ORDERS_KEY,))
    logger.info("Souvenir deleted: %s", souvenir_id)
