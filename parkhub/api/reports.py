"""Income reports: JSON and CSV export. Never cached."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from parkhub.api.auth import RequireReports, UserInfo
from parkhub.core.database import get_db
from parkhub.schemas.income_report import IncomeReport
from parkhub.services.income_report import generate_income_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/income", response_model=IncomeReport)
async def income_report(
    period: str = Query(..., description="day | week | month"),
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireReports),
):
    """Income of the current day, week (from Monday) or calendar month."""
    return await generate_income_report(db, period)


def _csv_row(*cells) -> str:
    return ",".join('"' + str(c).replace('"', '""') + '"' for c in cells) + "\r\n"


def income_report_csv(report: IncomeReport) -> str:
    """One row per restaurant / store / ride, category subtotals and the grand total."""
    lines = [
        _csv_row("Period", report.period),
        _csv_row("Category", "Id", "Name", "Orders / tickets", "Items sold", "Income"),
    ]
    for r in report.consumption.restaurants:
        lines.append(_csv_row("Consumption", r.restaurant_id, r.restaurant_name, r.order_count, r.items_sold, r.total_income))
    lines.append(_csv_row("Consumption", "", "Total", "", "", report.consumption.total))
    for s in report.marketing.stores:
        lines.append(_csv_row("Marketing", s.store_id, s.store_name, s.order_count, s.items_sold, s.total_income))
    lines.append(_csv_row("Marketing", "", "Total", "", "", report.marketing.total))
    for ride in report.operations.rides:
        lines.append(_csv_row("Operations", ride.ride_id, ride.ride_name, ride.ticket_count, "", ride.total_income))
    lines.append(_csv_row("Operations", "", "Total", "", "", report.operations.total))
    lines.append(_csv_row("", "", "Grand total", "", "", report.grand_total))
    return "".join(lines)


@router.get("/income/export")
async def income_report_export(
    period: str = Query(..., description="day | week | month"),
    db: AsyncSession = Depends(get_db),
    _user: UserInfo = Depends(RequireReports),
):
    """Income report as CSV."""
    report = await generate_income_report(db, period)
    content = "\ufeff" + income_report_csv(report)  # BOM for Excel UTF-8
    filename = f"income_{period}_{report.period.replace(' ', '_')}.csv"
    return StreamingResponse(
        iter([content]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
