"""
Report inputs: orders and queue entries inside a window, plus current snapshots
of the reference data (names and prices) used to resolve them.
Every storage failure is raised as DataAccessError.
"""
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.exceptions import DataAccessError
from parkhub.core.logging_config import get_logger
from parkhub.models import (
    MenuItem,
    Restaurant,
    RestaurantOrder,
    Ride,
    RideQueueEntry,
    Souvenir,
    SouvenirOrder,
    Store,
)

logger = get_logger(__name__)


async def _execute(db: AsyncSession, stmt, what: str):
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error("Error fetching %s: %s", what, e)
        raise DataAccessError(f"Error fetching {what}: {e}") from e


async def restaurant_orders_in_range(
    db: AsyncSession, start: datetime, end: datetime
) -> List[RestaurantOrder]:
    stmt = select(RestaurantOrder).where(
        RestaurantOrder.timestamp >= start,
        RestaurantOrder.timestamp < end,
    )
    result = await _execute(db, stmt, "restaurant orders in range")
    return list(result.scalars().all())


async def souvenir_orders_in_range(
    db: AsyncSession, start: datetime, end: datetime
) -> List[SouvenirOrder]:
    stmt = select(SouvenirOrder).where(
        SouvenirOrder.timestamp >= start,
        SouvenirOrder.timestamp < end,
    )
    result = await _execute(db, stmt, "souvenir orders in range")
    return list(result.scalars().all())


async def ride_queues_in_range(
    db: AsyncSession, start: datetime, end: datetime
) -> List[RideQueueEntry]:
    stmt = select(RideQueueEntry).where(
        RideQueueEntry.joined_at >= start,
        RideQueueEntry.joined_at < end,
    )
    result = await _execute(db, stmt, "ride queues in range")
    return list(result.scalars().all())


async def restaurant_names(db: AsyncSession) -> Dict[str, str]:
    result = await _execute(db, select(Restaurant.restaurant_id, Restaurant.name), "restaurants")
    return {row.restaurant_id: row.name for row in result.all()}


async def store_names(db: AsyncSession) -> Dict[str, str]:
    result = await _execute(db, select(Store.store_id, Store.name), "stores")
    return {row.store_id: row.name for row in result.all()}


async def menu_item_prices(db: AsyncSession) -> Dict[str, Any]:
    """Raw stored prices; the aggregator parses them."""
    result = await _execute(db, select(MenuItem.menu_item_id, MenuItem.price), "menu items")
    return {row.menu_item_id: row.price for row in result.all()}


async def souvenir_prices(db: AsyncSession) -> Dict[str, Any]:
    result = await _execute(db, select(Souvenir.souvenir_id, Souvenir.price), "souvenirs")
    return {row.souvenir_id: row.price for row in result.all()}


async def ride_catalog(db: AsyncSession) -> Dict[str, Tuple[str, Any]]:
    """ride_id -> (name, raw price)."""
    result = await _execute(db, select(Ride.ride_id, Ride.name, Ride.price), "rides")
    return {row.ride_id: (row.name, row.price) for row in result.all()}
