from typing import Annotated
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.responses import attachment
from app.core.database import get_db
from app.core.dates import DateRange
from app.core.dependencies.auth import get_current_owner_id
from app.core.dependencies.dates import date_range_query, required_date_range_query
from app.core.pagination import PageDTO, PageQueryDTO, DEFAULT_LIMIT, MAX_LIMIT
from app.domain.invoices.schemas import InvoiceCreateDTO, InvoiceReadDTO
from app.services import invoices_service, export_service


router = APIRouter(prefix="/api/invoices", tags=["invoices"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]
owner_dependency = Annotated[UUID, Depends(get_current_owner_id)]


def page_query(
        page: Annotated[int, Query(ge=1)] = 1,
        limit: Annotated[int, Query(ge=1, le=MAX_LIMIT)] = DEFAULT_LIMIT
) -> PageQueryDTO:
    return PageQueryDTO(page=page, limit=limit)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InvoiceReadDTO)
async def create_invoice(schema: InvoiceCreateDTO, db: db_dependency, owner_id: owner_dependency, response: Response):
    invoice = await invoices_service.create_invoice(db, owner_id, schema)
    response.headers["Location"] = f"/api/invoices/{invoice.id}"
    return InvoiceReadDTO.model_validate(invoice)


@router.get("", response_model=PageDTO[InvoiceReadDTO])
async def list_invoices(
        db: db_dependency,
        owner_id: owner_dependency,
        date_range: Annotated[DateRange, Depends(date_range_query)],
        query: Annotated[PageQueryDTO, Depends(page_query)]
):
    return await invoices_service.list_invoices(db, owner_id, date_range, query)


@router.get("/export/csv", response_class=Response)
async def export_invoices_csv(
        db: db_dependency,
        owner_id: owner_dependency,
        date_range: Annotated[DateRange, Depends(required_date_range_query)]
):
    return attachment(await export_service.export_csv(db, owner_id, date_range))


@router.get("/{invoice_id}", response_model=InvoiceReadDTO)
async def get_invoice(invoice_id: int, db: db_dependency, owner_id: owner_dependency):
    return InvoiceReadDTO.model_validate(await invoices_service.get_invoice(db, owner_id, invoice_id))


@router.get("/{invoice_id}/pdf", response_class=Response)
async def invoice_pdf(invoice_id: int, db: db_dependency, owner_id: owner_dependency):
    return attachment(await export_service.export_pdf(db, owner_id, invoice_id))
