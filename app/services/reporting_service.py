from datetime import datetime
from decimal import Decimal
from typing import Iterable
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dates import DateRange, TZ, day_range, month_range, year_range, local_now, parse_date
from app.domain.invoices import crud
from app.domain.invoices.models import Invoice
from app.domain.invoices.schemas import InvoiceReadDTO
from app.domain.reporting.schemas import SummaryDTO, DailyReportDTO, DailyTotalsDTO
from app.services import invoices_service


def calendar_windows(now: datetime) -> dict[str, DateRange]:
    now = now.astimezone(TZ)
    prev_year, prev_month = (now.year - 1, 12) if now.month == 1 else (now.year, now.month - 1)
    return {
        "this_month": month_range(now.year, now.month),
        "prev_month": month_range(prev_year, prev_month),
        "this_year": year_range(now.year),
    }


async def summary(
        db: AsyncSession,
        owner_id: UUID,
        date_range: DateRange | None = None,
        *,
        now: datetime | None = None
) -> SummaryDTO:
    overall = await invoices_service.aggregate(db, owner_id, date_range)
    windows = calendar_windows(now or local_now())
    periods = {name: await invoices_service.aggregate(db, owner_id, window) for name, window in windows.items()}
    return SummaryDTO(**overall.model_dump(), timezone=TZ.key, **periods)


def fold_totals(invoices: Iterable[Invoice]) -> DailyTotalsDTO:
    count, revenue, trucks = 0, Decimal("0"), 0
    for invoice in invoices:
        count += 1
        revenue += Decimal(invoice.total)
        trucks += invoice.trucks
    return DailyTotalsDTO(invoices=count, total_revenue=revenue, total_trucks=trucks)


async def daily(
        db: AsyncSession,
        owner_id: UUID,
        day: str | None = None,
        *,
        now: datetime | None = None
) -> DailyReportDTO:
    target = parse_date(day) if day else (now or local_now()).astimezone(TZ).date()
    invoices = await crud.list_invoices_in_range(db, owner_id, day_range(target))
    return DailyReportDTO(
        date=target,
        totals=fold_totals(invoices),
        invoices=[InvoiceReadDTO.model_validate(invoice) for invoice in invoices]
    )
