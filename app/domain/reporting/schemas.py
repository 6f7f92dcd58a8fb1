import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from app.domain.invoices.schemas import InvoiceReadDTO, Money


class AggregateDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    invoices: int = 0
    total_revenue: Money = Decimal("0")
    total_trucks: int = 0
    avg_rate_per_ton: Money = Decimal("0")


class SummaryDTO(AggregateDTO):
    timezone: str
    this_month: AggregateDTO
    prev_month: AggregateDTO
    this_year: AggregateDTO


class DailyTotalsDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    invoices: int = 0
    total_revenue: Money = Decimal("0")
    total_trucks: int = 0


class DailyReportDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    totals: DailyTotalsDTO
    invoices: list[InvoiceReadDTO]
