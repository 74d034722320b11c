from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireStaff, RequireStaffAdmin, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.cache import RIDES_KEY, Cache, get_cache
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import Staff
from parkhub.models.staff import StaffRole
from parkhub.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from parkhub.services.auth_service import hash_password

router = APIRouter(prefix="/staff", tags=["staff"])
logger = get_logger(__name__)

RIDE_ROLES = (StaffRole.RIDE_STAFF, StaffRole.RIDE_MANAGER)
MAINTENANCE_ROLES = (StaffRole.MAINTENANCE_STAFF, StaffRole.MAINTENANCE_MANAGER)


async def _list_by_roles(db: AsyncSession, roles=None):
    stmt = select(Staff).order_by(Staff.name, Staff.staff_id)
    if roles:
        stmt = stmt.where(Staff.role.in_(roles))
    result = await db.execute(stmt)
    return result.scalars().all()


async def _ensure_email_free(db: AsyncSession, email: str) -> None:
    r = await db.execute(select(Staff.staff_id).where(func.lower(Staff.email) == email.lower()))
    if r.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Email is already in use")


@router.get("", response_model=list[StaffResponse])
async def list_staff(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaff),
):
    return await _list_by_roles(db)


@router.get("/ride", response_model=list[StaffResponse])
async def list_ride_staff(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaff),
):
    """RideStaff and RideManager, e.g. to assign an operator to a ride."""
    return await _list_by_roles(db, RIDE_ROLES)


@router.get("/maintenance", response_model=list[StaffResponse])
async def list_maintenance_staff(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaff),
):
    return await _list_by_roles(db, MAINTENANCE_ROLES)


@router.get("/by-email/{email}", response_model=StaffResponse)
async def get_staff_by_email(
    email: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaff),
):
    result = await db.execute(select(Staff).where(func.lower(Staff.email) == email.strip().lower()))
    staff = result.scalar_one_or_none()
    if not staff:
        raise HTTPException(status_code=404, detail="Staff not found")
    return staff


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaff),
):
    return await get_or_404(db, Staff, Staff.staff_id, staff_id, "Staff not found")


@router.post("", response_model=StaffResponse, status_code=201)
async def create_staff(
    data: StaffCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaffAdmin),
):
    email = data.email.strip().lower()
    await _ensure_email_free(db, email)
    staff = Staff(
        email=email,
        password_hash=hash_password(data.password),
        name=data.name.strip(),
        role=data.role,
    )
    db.add(staff)
    await db.flush()
    await db.refresh(staff)
    logger.info("Staff created: %s (%s)", staff.staff_id, staff.role.value)
    return staff


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: str,
    data: StaffUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireStaffAdmin),
):
    staff = await get_or_404(db, Staff, Staff.staff_id, staff_id, "Staff not found")
    if data.email is not None:
        email = data.email.strip().lower()
        if email != staff.email:
            await _ensure_email_free(db, email)
        data.email = email
    apply_update(staff, data, required=("email", "name", "role"), exclude=("password",))
    if data.password is not None and data.password.strip():
        staff.password_hash = hash_password(data.password)
    await db.flush()
    await db.refresh(staff)
    return staff


@router.delete("/{staff_id}", status_code=204)
async def delete_staff(
    staff_id: str,
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    _user: UserInfo = Depends(RequireStaffAdmin),
):
    await delete_or_404(db, Staff, Staff.staff_id, staff_id, "Staff not found")
    await db.commit()
    # rides operated by this staff member go too
    await cache.delete(RIDES_KEY)
    logger.info("Staff deleted: %s", staff_id)
