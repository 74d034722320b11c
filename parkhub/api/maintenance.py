"""Maintenance schedule. A staff member holds at most one Pending or Ongoing task."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireMaintenance, UserInfo
from parkhub.api.crud import apply_update, delete_or_404, get_or_404
from parkhub.core.database import get_db
from parkhub.core.logging_config import get_logger
from parkhub.models import ACTIVE_MAINTENANCE_STATUSES, MaintenanceTask, Ride, Staff
from parkhub.schemas.maintenance import (
    MaintenanceTaskCreate,
    MaintenanceTaskResponse,
    MaintenanceTaskUpdate,
)

router = APIRouter(prefix="/maintenance", tags=["maintenance"])
logger = get_logger(__name__)


async def _ensure_no_active_task(db: AsyncSession, staff_id: str, exclude_id: Optional[str] = None) -> None:
    stmt = select(MaintenanceTask.maintenance_task_id).where(
        MaintenanceTask.staff_id == staff_id,
        MaintenanceTask.status.in_(ACTIVE_MAINTENANCE_STATUSES),
    )
    if exclude_id:
        stmt = stmt.where(MaintenanceTask.maintenance_task_id != exclude_id)
    r = await db.execute(stmt.limit(1))
    if r.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=409,
            detail="This staff member already has an active (Pending or Ongoing) maintenance task.",
        )


@router.get("", response_model=list[MaintenanceTaskResponse])
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireMaintenance),
):
    result = await db.execute(
        select(MaintenanceTask).order_by(MaintenanceTask.start_date, MaintenanceTask.maintenance_task_id)
    )
    return result.scalars().all()


@router.get("/staff/{staff_id}", response_model=list[MaintenanceTaskResponse])
async def list_tasks_by_staff(
    staff_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireMaintenance),
):
    result = await db.execute(
        select(MaintenanceTask)
        .where(MaintenanceTask.staff_id == staff_id)
        .order_by(MaintenanceTask.start_date)
    )
    return result.scalars().all()


@router.post("", response_model=MaintenanceTaskResponse, status_code=201)
async def create_task(
    data: MaintenanceTaskCreate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireMaintenance),
):
    await get_or_404(db, Ride, Ride.ride_id, data.ride_id, "Ride not found")
    await get_or_404(db, Staff, Staff.staff_id, data.staff_id, "Staff not found")
    await _ensure_no_active_task(db, data.staff_id)
    task = MaintenanceTask(**data.model_dump())
    db.add(task)
    await db.flush()
    await db.refresh(task)
    logger.info("Maintenance task %s scheduled for ride %s", task.maintenance_task_id, task.ride_id)
    return task


@router.patch("/{task_id}", response_model=MaintenanceTaskResponse)
async def update_task(
    task_id: str,
    data: MaintenanceTaskUpdate,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireMaintenance),
):
    task = await get_or_404(db, MaintenanceTask, MaintenanceTask.maintenance_task_id, task_id, "Maintenance schedule not found")
    if data.ride_id is not None:
        await get_or_404(db, Ride, Ride.ride_id, data.ride_id, "Ride not found")
    if data.staff_id is not None:
        await get_or_404(db, Staff, Staff.staff_id, data.staff_id, "Staff not found")
    apply_update(task, data, required=("ride_id", "staff_id", "start_date", "end_date", "status"))
    if task.end_date < task.start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    if task.status in ACTIVE_MAINTENANCE_STATUSES:
        await _ensure_no_active_task(db, task.staff_id, exclude_id=task.maintenance_task_id)
    await db.flush()
    await db.refresh(task)
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireMaintenance),
):
    await delete_or_404(db, MaintenanceTask, MaintenanceTask.maintenance_task_id, task_id, "Maintenance schedule not found")
    logger.info("Maintenance task deleted: %s", task_id)
