"""Ride queues. Joining a queue is buying a ticket at the ride's current price."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireRideQueues, UserInfo, ensure_customer_or_resource
from parkhub.api.crud import delete_or_404, get_or_404
from parkhub.core.clock import venue_now
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.core.permissions import Resource
from parkhub.models import Customer, Ride, RideQueueEntry
from parkhub.schemas.ride import QueuePositionUpdate, RideQueueCreate, RideQueueResponse

router = APIRouter(prefix="/ride-queues", tags=["ride-queues"])
logger = get_logger(__name__)


@router.get("", response_model=list[RideQueueResponse])
async def list_ride_queues(
    ride_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    stmt = select(RideQueueEntry).order_by(RideQueueEntry.queue_position, RideQueueEntry.joined_at)
    if ride_id:
        stmt = stmt.where(RideQueueEntry.ride_id == ride_id)
    result = await db.execute(stmt)
    return result.scalars().all()


@router.post("", response_model=RideQueueResponse, status_code=201)
async def join_ride_queue(
    data: RideQueueCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserInfo = Depends(RequireAnyAuth),
):
    ensure_customer_or_resource(current_user, data.customer_id, Resource.RIDE_QUEUES)
    await get_or_404(db, Customer, Customer.customer_id, data.customer_id, "Customer not found")
    await get_or_404(db, Ride, Ride.ride_id, data.ride_id, "Ride not found")
    entry = RideQueueEntry(
        ride_id=data.ride_id,
        customer_id=data.customer_id,
        queue_position=data.queue_position,
        joined_at=venue_now(),
    )
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    logger.info("Customer %s joined queue of ride %s", data.customer_id, data.ride_id)
    return entry


@router.patch("/{ride_queue_id}/position", response_model=RideQueueResponse)
async def update_queue_position(
    ride_queue_id: str,
    body: QueuePositionUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRideQueues),
):
    entry = await get_or_404(
        db, RideQueueEntry, RideQueueEntry.ride_queue_id, ride_queue_id, "Ride queue entry not found"
    )
    entry.queue_position = body.queue_position
    await db.flush()
    await db.refresh(entry)
    return entry


@router.delete("/{ride_queue_id}", status_code=204)
async def delete_ride_queue_entry(
    ride_queue_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRideQueues),
):
    await delete_or_404(
        db, RideQueueEntry, RideQueueEntry.ride_queue_id, ride_queue_id, "Ride queue entry not found"
    )
    logger.info("Ride queue entry deleted: %s", ride_queue_id)
