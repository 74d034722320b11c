from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireRides, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, dump_all, get_or_404
from parkhub.core.cache import RIDES_KEY, Cache, get_cache
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import Ride, Staff
from parkhub.schemas.ride import RideCreate, RideResponse, RideUpdate

router = APIRouter(prefix="/rides", tags=["rides"])
logger = get_logger(__name__)


@router.get("", response_model=list[RideResponse])
async def list_rides(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    cached = await cache.get(RIDES_KEY)
    if cached is not None:
        return cached
    result = await db.execute(select(Ride).order_by(Ride.name, Ride.ride_id))
    rides = dump_all(RideResponse, result.scalars().all())
    await cache.set(RIDES_KEY, rides)
    return rides


@router.get("/{ride_id}", response_model=RideResponse)
async def get_ride(
    ride_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    return await get_or_404(db, Ride, Ride.ride_id, ride_id, "Ride not found")


@router.post("", response_model=RideResponse, status_code=201)
async def create_ride(
    data: RideCreate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireRides),
):
    await get_or_404(db, Staff, Staff.staff_id, data.staff_id, "Staff not found")
    ride = Ride(**data.model_dump())
    db.add(ride)
    await db.flush()
    await db.refresh(ride)
    await db.commit()
    await cache.delete(RIDES_KEY)
    logger.info("Ride created: %s", ride.ride_id)
    return ride


@router.patch("/{ride_id}", response_model=RideResponse)
async def update_ride(
    ride_id: str,
    data: RideUpdate,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireRides),
):
    ride = await get_or_404(db, Ride, Ride.ride_id, ride_id, "Ride not found")
    if data.staff_id is not None:
        await get_or_404(db, Staff, Staff.staff_id, data.staff_id, "Staff not found")
    apply_update(ride, data, required=("status", "name", "price", "location", "staff_id"))
    await db.flush()
    await db.refresh(ride)
    await db.commit()
    await cache.delete(RIDES_KEY)
    return ride


@router.delete("/{ride_id}", status_code=204)
async def delete_ride(
    ride_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireRides),
):
    await delete_or_404(db, Ride, Ride.ride_id, ride_id, "Ride not found")
    await db.commit()
    await cache.delete(RIDES_KEY)
    logger.info("Ride deleted: %s", ride_id)
