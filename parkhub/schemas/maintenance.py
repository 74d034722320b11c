from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from parkhub.models import MaintenanceStatus


class MaintenanceTaskResponse(BaseModel):
    maintenance_task_id: str
    ride_id: str
    staff_id: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: MaintenanceStatus

    class Config:
        from_attributes = True


class MaintenanceTaskCreate(BaseModel):
    ride_id: str
    staff_id: str
    description: Optional[str] = None
    start_date: datetime = Field(..., description="YYYY-MM-DDTHH:MM")
    end_date: datetime = Field(..., description="YYYY-MM-DDTHH:MM")
    status: MaintenanceStatus = MaintenanceStatus.PENDING

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MaintenanceTaskUpdate(BaseModel):
    ride_id: Optional[str] = None
    staff_id: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[MaintenanceStatus] = None
