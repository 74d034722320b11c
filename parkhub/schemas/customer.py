from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CustomerResponse(BaseModel):
    customer_id: str
    name: str
    virtual_balance: Decimal

    class Config:
        from_attributes = True


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    virtual_balance: Decimal = Field(default=Decimal("0"), ge=0)


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    virtual_balance: Optional[Decimal] = Field(default=None, ge=0)


class TopUpBody(BaseModel):
    amount: Decimal = Field(..., gt=0)
