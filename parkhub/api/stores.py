from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireStores, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, dump_all, get_or_404
from parkhub.core.cache import (
    SOUVENIR_ORDERS_KEY,
    SOUVENIRS_ALL_KEY,
    STORES_KEY,
    Cache,
    get_cache,
    souvenirs_store_key,
)
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import Store
from parkhub.schemas.store import StoreCreate, StoreResponse, StoreUpdate

router = APIRouter(prefix="/stores", tags=["stores"])
logger = get_logger(__name__)


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    cached = await cache.get(STORES_KEY)
    if cached is not None:
        return cached
    result = await db.execute(select(Store).order_by(Store.name, Store.store_id))
    stores = dump_all(StoreResponse, result.scalars().all())
    await cache.set(STORES_KEY, stores)
    return stores


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    return await get_or_404(db, Store, Store.store_id, store_id, "Store not found")


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    store = Store(**data.model_dump())
    db.add(store)
    await db.flush()
    await db.refresh(store)
    await db.commit()
    await cache.delete(STORES_KEY)
    logger.info("Store created: %s", store.store_id)
    return store


@router.patch("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: str,
    data: StoreUpdate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    store = await get_or_404(db, Store, Store.store_id, store_id, "Store not found")
    apply_update(store, data, required=("name", "opening_time", "closing_time", "status"))
    await db.flush()
    await db.refresh(store)
    await db.commit()
    await cache.delete(STORES_KEY)
    return store


@router.delete("/{store_id}", status_code=204)
async def delete_store(
    store_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    await delete_or_404(db, Store, Store.store_id, store_id, "Store not found")
    await db.commit()
    # souvenirs and their orders cascade with the store
    await cache.delete(STORES_KEY, SOUVENIRS_ALL_KEY, souvenirs_store_key(store_id), SOUVENIR_ORDERS_KEY)
    logger.info("Store deleted: %s", store_id)
