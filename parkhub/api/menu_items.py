from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireAnyAuth, RequireRestaurants, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import MenuItem, Restaurant
from parkhub.schemas.restaurant import MenuItemCreate, MenuItemResponse, MenuItemUpdate

router = APIRouter(prefix="/menu-items", tags=["menu-items"])
logger = get_logger(__name__)


@router.get("", response_model=list[MenuItemResponse])
async def list_menu_items(
    restaurant_id: Optional[str] = Query(None, description="Only the menu of this restaurant"),
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    stmt = select(MenuItem).order_by(MenuItem.name, MenuItem.menu_item_id)
    if restaurant_id:
        stmt = stmt.where(MenuItem.restaurant_id == restaurant_id)
    result = await db.execute(stmt)
    return result.scalars().all()


@router.get("/{menu_item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    menu_item_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireAnyAuth),
):
    return await get_or_404(db, MenuItem, MenuItem.menu_item_id, menu_item_id, "Menu item not found")


@router.post("", response_model=MenuItemResponse, status_code=201)
async def create_menu_item(
    data: MenuItemCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    await get_or_404(db, Restaurant, Restaurant.restaurant_id, data.restaurant_id, "Restaurant not found")
    item = MenuItem(**data.model_dump())
    db.add(item)
    await db.flush()
    await db.refresh(item)
    logger.info("Menu item created: %s (restaurant %s)", item.menu_item_id, item.restaurant_id)
    return item


@router.patch("/{menu_item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    menu_item_id: str,
    data: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    item = await get_or_404(db, MenuItem, MenuItem.menu_item_id, menu_item_id, "Menu item not found")
    if data.restaurant_id is not None:
        await get_or_404(db, Restaurant, Restaurant.restaurant_id, data.restaurant_id, "Restaurant not found")
    apply_update(item, data, required=("name", "price", "restaurant_id"))
    await db.flush()
    await db.refresh(item)
    return item


@router.delete("/{menu_item_id}", status_code=204)
async def delete_menu_item(
    menu_item_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireRestaurants),
):
    await delete_or_404(db, MenuItem, MenuItem.menu_item_id, menu_item_id, "Menu item not found")
    logger.info("Menu item deleted: %s", menu_item_id)
