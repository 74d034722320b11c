from typing import List

from pydantic import BaseModel


class RestaurantIncome(BaseModel):
    restaurant_id: str
    restaurant_name: str
    total_income: float
    order_count: int
    items_sold: int


class StoreIncome(BaseModel):
    store_id: str
    store_name: str
    total_income: float
    order_count: int
    items_sold: int


class RideIncome(BaseModel):
    ride_id: str
    ride_name: str
    total_income: float
    ticket_count: int


class ConsumptionReport(BaseModel):
    """Restaurant orders."""

    total: float
    restaurants: List[RestaurantIncome]


class MarketingReport(BaseModel):
    """Souvenir orders."""

    total: float
    stores: List[StoreIncome]


class OperationsReport(BaseModel):
    """Ride tickets (one queue entry = one ticket)."""

    total: float
    rides: List[RideIncome]


class IncomeReport(BaseModel):
    consumption: ConsumptionReport
    marketing: MarketingReport
    operations: OperationsReport
    grand_total: float
    period: str  # "2025-04-10" | "Week starting 2025-04-07" | "2025-04"
    # Orders that hit a missing reference or an unparseable price; totals are unaffected.
    anomalies: int = 0
