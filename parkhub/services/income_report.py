"""
Income report over a period.

Consumption = restaurant orders grouped by restaurant, Marketing = souvenir
orders grouped by store, Operations = ride tickets (queue entries) grouped by
ride. Money is summed as Decimal and converted to float only in the output.
A missing reference or an unparseable price never fails the report: the order
is valued at 0 (or named "Unknown ...") and counted in `anomalies`.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.core.logging_config import get_logger
from parkhub.schemas.income_report import (
    ConsumptionReport,
    IncomeReport,
    MarketingReport,
    OperationsReport,
    RestaurantIncome,
    RideIncome,
    StoreIncome,
)
from parkhub.services import report_data
from parkhub.services.period import resolve_period

logger = get_logger(__name__)

ZERO = Decimal("0")

UNKNOWN_RESTAURANT = "Unknown Restaurant"
UNKNOWN_STORE = "Unknown Store"
UNKNOWN_RIDE = "Unknown Ride"


def parse_price(raw: Any) -> Optional[Decimal]:
    """Stored price -> Decimal, None when missing or not a finite number."""
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        value = raw
    else:
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return None
    return value if value.is_finite() else None


def _parse_quantity(raw: Any) -> Optional[int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


class _Totals:
    """Running totals of one restaurant / store / ride."""

    __slots__ = ("name", "income", "count", "items")

    def __init__(self, name: str):
        self.name = name
        self.income = ZERO
        self.count = 0
        self.items = 0


def _add(groups: Dict[str, _Totals], group_id: str, name: str, value: Decimal, quantity: int) -> None:
    totals = groups.get(group_id)
    if totals is None:
        totals = groups[group_id] = _Totals(name)
    totals.income += value
    totals.count += 1
    totals.items += quantity


def _sorted(groups: Dict[str, _Totals]) -> Iterable[Tuple[str, _Totals]]:
    return sorted(groups.items(), key=lambda kv: (kv[1].name, kv[0]))


def _category_total(groups: Dict[str, _Totals]) -> Decimal:
    return sum((t.income for t in groups.values()), ZERO)


def aggregate_income(
    *,
    restaurant_orders: Iterable[Any],
    souvenir_orders: Iterable[Any],
    ride_queues: Iterable[Any],
    restaurants: Mapping[str, str],
    menu_item_prices: Mapping[str, Any],
    stores: Mapping[str, str],
    souvenir_prices: Mapping[str, Any],
    rides: Mapping[str, Tuple[str, Any]],
    period_label: str,
) -> IncomeReport:
    """Fold the three record streams against reference data into one report."""
    anomalies = 0
    # Summed line by line, independently of the category totals.
    grand = ZERO

    by_restaurant: Dict[str, _Totals] = {}
    for order in restaurant_orders:
        ok = True
        price = parse_price(menu_item_prices.get(order.menu_item_id))
        if price is None:
            ok = False
            price = ZERO
        quantity = _parse_quantity(order.quantity)
        if quantity is None:
            ok = False
            quantity = 0
        name = restaurants.get(order.restaurant_id)
        if name is None:
            ok = False
            name = UNKNOWN_RESTAURANT
        value = price * quantity
        grand += value
        _add(by_restaurant, order.restaurant_id, name, value, quantity)
        if not ok:
            anomalies += 1
            logger.warning(
                "Restaurant order %s: unresolved menu item %s or restaurant %s, counted at %s",
                order.order_restaurant_id, order.menu_item_id, order.restaurant_id, value,
            )

    by_store: Dict[str, _Totals] = {}
    for order in souvenir_orders:
        ok = True
        price = parse_price(souvenir_prices.get(order.souvenir_id))
        if price is None:
            ok = False
            price = ZERO
        quantity = _parse_quantity(order.quantity)
        if quantity is None:
            ok = False
            quantity = 0
        name = stores.get(order.store_id)
        if name is None:
            ok = False
            name = UNKNOWN_STORE
        value = price * quantity
        grand += value
        _add(by_store, order.store_id, name, value, quantity)
        if not ok:
            anomalies += 1
            logger.warning(
                "Souvenir order %s: unresolved souvenir %s or store %s, counted at %s",
                order.order_souvenir_id, order.souvenir_id, order.store_id, value,
            )

    by_ride: Dict[str, _Totals] = {}
    for entry in ride_queues:
        ride = rides.get(entry.ride_id)
        name, raw_price = ride if ride is not None else (UNKNOWN_RIDE, None)
        price = parse_price(raw_price)
        if ride is None or price is None:
            anomalies += 1
            logger.warning(
                "Ride queue entry %s: unresolved ride %s or its price, counted at 0",
                entry.ride_queue_id, entry.ride_id,
            )
            price = ZERO
        grand += price
        # a ticket has no quantity: items stay at 0, count is the ticket count
        _add(by_ride, entry.ride_id, name, price, 0)

    consumption_total = _category_total(by_restaurant)
    marketing_total = _category_total(by_store)
    operations_total = _category_total(by_ride)
    if consumption_total + marketing_total + operations_total != grand:
        logger.error(
            "Income report %s: category totals %s + %s + %s do not match grand total %s",
            period_label, consumption_total, marketing_total, operations_total, grand,
        )

    return IncomeReport(
        consumption=ConsumptionReport(
            total=float(consumption_total),
            restaurants=[
                RestaurantIncome(
                    restaurant_id=rid,
                    restaurant_name=t.name,
                    total_income=float(t.income),
                    order_count=t.count,
                    items_sold=t.items,
                )
                for rid, t in _sorted(by_restaurant)
            ],
        ),
        marketing=MarketingReport(
            total=float(marketing_total),
            stores=[
                StoreIncome(
                    store_id=sid,
                    store_name=t.name,
                    total_income=float(t.income),
                    order_count=t.count,
                    items_sold=t.items,
                )
                for sid, t in _sorted(by_store)
            ],
        ),
        operations=OperationsReport(
            total=float(operations_total),
            rides=[
                RideIncome(
                    ride_id=rid,
                    ride_name=t.name,
                    total_income=float(t.income),
                    ticket_count=t.count,
                )
                for rid, t in _sorted(by_ride)
            ],
        ),
        grand_total=float(grand),
        period=period_label,
        anomalies=anomalies,
    )


async def generate_income_report(
    db: AsyncSession, period: str, now: Optional[datetime] = None
) -> IncomeReport:
    """Raises InvalidPeriod for an unknown period and DataAccessError on any fetch failure."""
    window = resolve_period(period, now)
    logger.info("Income report %s: [%s, %s)", window.label, window.start, window.end)

    # One AsyncSession runs one statement at a time, so the fetches are sequential.
    restaurant_orders = await report_data.restaurant_orders_in_range(db, window.start, window.end)
    souvenir_orders = await report_data.souvenir_orders_in_range(db, window.start, window.end)
    ride_queues = await report_data.ride_queues_in_range(db, window.start, window.end)
    restaurants = await report_data.restaurant_names(db)
    menu_item_prices = await report_data.menu_item_prices(db)
    stores = await report_data.store_names(db)
    souvenir_prices = await report_data.souvenir_prices(db)
    rides = await report_data.ride_catalog(db)

    report = aggregate_income(
        restaurant_orders=restaurant_orders,
        souvenir_orders=souvenir_orders,
        ride_queues=ride_queues,
        restaurants=restaurants,
        menu_item_prices=menu_item_prices,
        stores=stores,
        souvenir_prices=souvenir_prices,
        rides=rides,
        period_label=window.label,
    )
    if report.anomalies:
        logger.warning("Income report %s: %s records with unresolved data", window.label, report.anomalies)
    return report
