import logging
from decimal import Decimal
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import INVOICE_SEQUENCE_KEY, INVOICE_NUMBER_BASE
from app.core.dates import DateRange
from app.core.pagination import PageDTO, PageQueryDTO
from app.domain.exceptions import NotFound
from app.domain.invoices import crud
from app.domain.invoices.models import Invoice
from app.domain.invoices.schemas import InvoiceCreateDTO, InvoiceReadDTO
from app.domain.reporting.schemas import AggregateDTO


logger = logging.getLogger("app.invoices")


async def next_invoice_number(db: AsyncSession, sequence_key: str = INVOICE_SEQUENCE_KEY) -> int:
    return await crud.next_number(db, sequence_key, INVOICE_NUMBER_BASE)


def compute_total(rate_per_ton: Decimal, trucks: int) -> Decimal:
    return Decimal(rate_per_ton) * trucks


async def create_invoice(db: AsyncSession, owner_id: UUID, schema: InvoiceCreateDTO) -> Invoice:
    data = schema.model_dump()
    data["total"] = compute_total(schema.rate_per_ton, schema.trucks)
    data["owner_id"] = owner_id
    data["invoice_number"] = await next_invoice_number(db)

    invoice = await crud.create_invoice(db, data)
    await db.flush()
    logger.info("Invoice %s created (trucks=%s total=%s)", invoice.invoice_number, invoice.trucks, invoice.total)
    return invoice


async def get_invoice(db: AsyncSession, owner_id: UUID, invoice_id: int) -> Invoice:
    invoice = await crud.get_invoice_for_owner(db, invoice_id, owner_id)
    if not invoice:
        raise NotFound("Invoice not found", ctx={"invoice_id": invoice_id})
    return invoice


async def list_invoices(
        db: AsyncSession,
        owner_id: UUID,
        date_range: DateRange | None,
        query: PageQueryDTO
) -> PageDTO[InvoiceReadDTO]:
    invoices, total = await crud.list_invoices_page(db, owner_id, date_range, query.page, query.limit)
    return PageDTO[InvoiceReadDTO](
        data=[InvoiceReadDTO.model_validate(invoice) for invoice in invoices],
        page=query.page,
        limit=query.limit,
        total=total
    )


async def aggregate(db: AsyncSession, owner_id: UUID, date_range: DateRange | None = None) -> AggregateDTO:
    row = await crud.aggregate_invoices(db, owner_id, date_range)
    return AggregateDTO(
        invoices=int(row.invoices or 0),
        total_revenue=Decimal(row.total_revenue or 0),
        total_trucks=int(row.total_trucks or 0),
        avg_rate_per_ton=Decimal(row.avg_rate_per_ton or 0).quantize(Decimal("0.01"))
    )
