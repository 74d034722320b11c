from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireRestaurants, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import Restaurant
from parkhub.schemas.restaurant import RestaurantCreate, RestaurantResponse, RestaurantUpdate

router = APIRouter(prefix="/restaurants", tags=["restaurants"])
logger = get_logger(__name__)


@router.get("", response_model=list[RestaurantResponse])
async def list_restaurants(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    result = await db.execute(select(Restaurant).order_by(Restaurant.name, Restaurant.restaurant_id))
    return result.scalars().all()


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    return await get_or_404(db, Restaurant, Restaurant.restaurant_id, restaurant_id, "Restaurant not found")


@router.post("", response_model=RestaurantResponse, status_code=201)
async def create_restaurant(
    data: RestaurantCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    restaurant = Restaurant(**data.model_dump())
    db.add(restaurant)
    await db.flush()
    await db.refresh(restaurant)
    logger.info("Restaurant created: %s", restaurant.restaurant_id)
    return restaurant


@router.patch("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: str,
    data: RestaurantUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    restaurant = await get_or_404(db, Restaurant, Restaurant.restaurant_id, restaurant_id, "Restaurant not found")
    apply_update(
        restaurant, data,
        required=("name", "opening_time", "closing_time", "cuisine_type", "status"),
    )
    await db.flush()
    await db.refresh(restaurant)
    return restaurant


@router.delete("/{restaurant_id}", status_code=204)
async def delete_restaurant(
    restaurant_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    await delete_or_404(db, Restaurant, Restaurant.restaurant_id, restaurant_id, "Restaurant not found")
    logger.info("Restaurant deleted: %s", restaurant_id)
