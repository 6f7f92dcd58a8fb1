from uuid import UUID
from sqlalchemy import select, func, delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dates import DateRange
from app.core.pagination import paginate
from .counters import counters
from .models import Invoice


async def next_number(db: AsyncSession, key: str, base: int) -> int:
    row = await db.execute(
        insert(counters)
        .values(key=key, value=base + 1)
        .on_conflict_do_update(
            index_elements=[counters.c.key],
            set_={"value": counters.c.value + 1},
        )
        .returning(counters.c.value)
    )
    return int(row.scalar_one())


async def reset_counter(db: AsyncSession, key: str) -> int:
    result = await db.execute(delete(counters).where(counters.c.key == key))
    return result.rowcount or 0


def _owner_filters(owner_id: UUID, date_range: DateRange | None) -> list:
    where = [Invoice.owner_id == owner_id]
    if date_range is not None:
        if date_range.start is not None:
            where.append(Invoice.created_at >= date_range.start)
        if date_range.end is not None:
            where.append(Invoice.created_at <= date_range.end)
    return where


def _newest_first() -> list:
    return [Invoice.created_at.desc(), Invoice.id.desc()]


async def create_invoice(db: AsyncSession, data: dict) -> Invoice:
    invoice = Invoice(**data)
    db.add(invoice)
    return invoice


async def get_invoice_for_owner(db: AsyncSession, invoice_id: int, owner_id: UUID) -> Invoice | None:
    stmt = select(Invoice).where(Invoice.id == invoice_id, Invoice.owner_id == owner_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_invoices_page(
        db: AsyncSession,
        owner_id: UUID,
        date_range: DateRange | None,
        page: int,
        limit: int
) -> tuple[list[Invoice], int]:
    return await paginate(
        db,
        select(Invoice),
        page=page,
        limit=limit,
        where=_owner_filters(owner_id, date_range),
        order_by=_newest_first()
    )


async def list_invoices_in_range(db: AsyncSession, owner_id: UUID, date_range: DateRange | None) -> list[Invoice]:
    stmt = select(Invoice).where(*_owner_filters(owner_id, date_range)).order_by(*_newest_first())
    result = await db.scalars(stmt)
    return list(result.all())


async def aggregate_invoices(db: AsyncSession, owner_id: UUID, date_range: DateRange | None):
    stmt = select(
        func.count(Invoice.id).label("invoices"),
        func.coalesce(func.sum(Invoice.total), 0).label("total_revenue"),
        func.coalesce(func.sum(Invoice.trucks), 0).label("total_trucks"),
        func.coalesce(func.avg(Invoice.rate_per_ton), 0).label("avg_rate_per_ton"),
    ).where(*_owner_filters(owner_id, date_range))
    result = await db.execute(stmt)
    return result.one()


async def count_invoices(db: AsyncSession, owner_id: UUID | None = None) -> int:
    stmt = select(func.count()).select_from(Invoice)
    if owner_id is not None:
        stmt = stmt.where(Invoice.owner_id == owner_id)
    return int(await db.scalar(stmt) or 0)


async def delete_invoices(db: AsyncSession, owner_id: UUID | None = None) -> int:
    stmt = delete(Invoice)
    if owner_id is not None:
        stmt = stmt.where(Invoice.owner_id == owner_id)
    result = await db.execute(stmt)
    return result.rowcount or 0
