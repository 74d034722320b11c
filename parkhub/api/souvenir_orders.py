from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireStores, UserInfo, ensure_customer_or_resource
from parkhub.api.crud import delete_or_404, dump_all, get_or_404
from parkhub.core.cache import SOUVENIR_ORDERS_KEY, Cache, get_cache
from parkhub.core.clock import venue_now
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import Resource
from parkhub.models import Customer, Souvenir, SouvenirOrder
from parkhub.schemas.store import SouvenirOrderCreate, SouvenirOrderResponse

router = APIRouter(prefix="/souvenir-orders", tags=["souvenir-orders"])
logger = get_logger(__name__)


@router.get("", response_model=list[SouvenirOrderResponse])
async def list_souvenir_orders(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    cached = await cache.get(SOUVENIR_ORDERS_KEY)
    if cached is not None:
        return cached
    result = await db.execute(
        select(SouvenirOrder).order_by(SouvenirOrder.timestamp, SouvenirOrder.order_souvenir_id)
    )
    orders = dump_all(SouvenirOrderResponse, result.scalars().all())
    await cache.set(SOUVENIR_ORDERS_KEY, orders)
    return orders


@router.get("/customer/{customer_id}/store/{store_id}", response_model=list[SouvenirOrderResponse])
async def list_customer_store_orders(
    customer_id: str,
    store_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    ensure_customer_or_resource(current_user, customer_id, Resource.STORES)
    result = await db.execute(
        select(SouvenirOrder)
        .where(SouvenirOrder.customer_id == customer_id, SouvenirOrder.store_id == store_id)
        .order_by(SouvenirOrder.timestamp.desc())
    )
    return result.scalars().all()


@router.get("/{order_id}", response_model=SouvenirOrderResponse)
async def get_souvenir_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    order = await get_or_404(db, SouvenirOrder, SouvenirOrder.order_souvenir_id, order_id, "Souvenir order not found")
    ensure_customer_or_resource(current_user, order.customer_id, Resource.STORES)
    return order


@router.post("", response_model=SouvenirOrderResponse, status_code=201)
async def create_souvenir_order(
    data: SouvenirOrderCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    ensure_customer_or_resource(current_user, data.customer_id, Resource.STORES)
    await get_or_404(db, Customer, Customer.customer_id, data.customer_id, "Customer not found")
    souvenir = await get_or_404(db, Souvenir, Souvenir.souvenir_id, data.souvenir_id, "Souvenir not found")
    if souvenir.store_id != data.store_id:
        raise HTTPException(status_code=400, detail="Souvenir is not sold in this store")
    order = SouvenirOrder(
        customer_id=data.customer_id,
        store_id=data.store_id,
        souvenir_id=data.souvenir_id,
        quantity=data.quantity,
        timestamp=venue_now(),
    )
    db.add(order)
    await db.flush()
    await db.refresh(order)
    await db.commit()
    await cache.delete(SOUVENIR_ORDERS_KEY)
    logger.info("Souvenir order created: %s", order.order_souvenir_id)
    return order


@router.delete("/{order_id}", status_code=204)
async def delete_souvenir_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStores),
):
    await delete_or_404(db, SouvenirOrder, SouvenirOrder.order_souvenir_id, order_id, "Souvenir order not found")
    await db.commit()
    await cache.delete(SOUVENIR_ORDERS_KEY)
    logger.info("Souvenir order deleted: %s", order_id)
