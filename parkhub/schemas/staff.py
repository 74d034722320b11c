from typing import Optional

from pydantic import BaseModel, Field

from parkhub.models import StaffRole


class StaffResponse(BaseModel):
    staff_id: str
    email: str
    name: str
    role: StaffRole

    class Config:
        from_attributes = True


class StaffCreate(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=4)
    name: str = Field(..., min_length=1)
    role: StaffRole


class StaffUpdate(BaseModel):
    email: Optional[str] = Field(default=None, min_length=3)
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[StaffRole] = None
    # Empty or omitted keeps the current password.
    password: Optional[str] = None
