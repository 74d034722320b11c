"""Restaurant orders: placed by guests, moved through the kitchen by staff."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireRestaurants, UserInfo, ensure_customer_or_resource
from parkhub.api.crud import delete_or_404, get_or_404
from parkhub.core.clock import venue_now
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import Resource
from parkhub.models import Customer, MenuItem, RestaurantOrder, RestaurantOrderStatus
from parkhub.schemas.restaurant import (
    RestaurantOrderCreate,
    RestaurantOrderResponse,
    RestaurantOrderStatusUpdate,
)

router = APIRouter(prefix="/restaurant-orders", tags=["restaurant-orders"])
logger = get_logger(__name__)


@router.get("", response_model=list[RestaurantOrderResponse])
async def list_restaurant_orders(
    restaurant_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    stmt = select(RestaurantOrder).order_by(RestaurantOrder.timestamp, RestaurantOrder.order_restaurant_id)
    if restaurant_id:
        stmt = stmt.where(RestaurantOrder.restaurant_id == restaurant_id)
    result = await db.execute(stmt)
    return result.scalars().all()


@router.get("/customer/{customer_id}/restaurant/{restaurant_id}", response_model=list[RestaurantOrderResponse])
async def list_customer_restaurant_orders(
    customer_id: str,
    restaurant_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    """Orders of one guest at one restaurant, newest first."""
    ensure_customer_or_resource(current_user, customer_id, Resource.RESTAURANTS)
    result = await db.execute(
        select(RestaurantOrder)
        .where(
            RestaurantOrder.customer_id == customer_id,
            RestaurantOrder.restaurant_id == restaurant_id,
        )
        .order_by(RestaurantOrder.timestamp.desc())
    )
    return result.scalars().all()


@router.post("", response_model=RestaurantOrderResponse, status_code=201)
async def create_restaurant_order(
    data: RestaurantOrderCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    ensure_customer_or_resource(current_user, data.customer_id, Resource.RESTAURANTS)
    await get_or_404(db, Customer, Customer.customer_id, data.customer_id, "Customer not found")
    item = await get_or_404(db, MenuItem, MenuItem.menu_item_id, data.menu_item_id, "Menu item not found")
    if item.restaurant_id != data.restaurant_id:
        raise HTTPException(status_code=400, detail="Menu item does not belong to this restaurant")
    order = RestaurantOrder(
        customer_id=data.customer_id,
        restaurant_id=data.restaurant_id,
        menu_item_id=data.menu_item_id,
        quantity=data.quantity,
        timestamp=venue_now(),
        status=RestaurantOrderStatus.PENDING,
    )
    db.add(order)
    await db.flush()
    await db.refresh(order)
    logger.info("Restaurant order created: %s", order.order_restaurant_id)
    return order


@router.patch("/{order_id}/status", response_model=RestaurantOrderResponse)
async def update_restaurant_order_status(
    order_id: str,
    body: RestaurantOrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    order = await get_or_404(
        db, RestaurantOrder, RestaurantOrder.order_restaurant_id, order_id, "Restaurant order not found"
    )
    order.status = body.status
    await db.flush()
    await db.refresh(order)
    logger.info("Restaurant order %s -> %s", order_id, body.status.value)
    return order


@router.delete("/{order_id}", status_code=204)
async def delete_restaurant_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    await delete_or_404(
        db, RestaurantOrder, RestaurantOrder.order_restaurant_id, order_id, "Restaurant order not found"
    )
    logger.info("Restaurant order deleted: %s", order_id)
