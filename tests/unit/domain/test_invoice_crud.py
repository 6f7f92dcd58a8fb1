import pytest
from datetime import datetime, timezone
from types import SimpleNamespace
from sqlalchemy.dialects import postgresql
from app.core.dates import DateRange
from app.domain.invoices import crud

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
END = datetime(2024, 1, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)


class _Db:
    """Records every statement and answers with empty results."""

    def __init__(self, count: int = 0):
        self.statements = []
        self.count = count

    async def execute(self, stmt):
        self.statements.append(stmt)
        return SimpleNamespace(
            scalars=lambda: SimpleNamespace(first=lambda: None),
            one=lambda: SimpleNamespace(invoices=0),
        )

    async def scalars(self, stmt):
        self.statements.append(stmt)
        return SimpleNamespace(all=lambda: [])

    async def scalar(self, stmt):
        self.statements.append(stmt)
        return self.count


def _compiled(stmt):
    return stmt.compile(dialect=postgresql.dialect())


def _sql(stmt) -> str:
    return " ".join(str(_compiled(stmt)).split())


@pytest.mark.asyncio
async def test_list_in_range_filters_by_owner_and_window_newest_first(owner_id):
    db = _Db()

    await crud.list_invoices_in_range(db, owner_id, DateRange(START, END))

    [stmt] = db.statements
    sql = _sql(stmt)
    assert "invoices.owner_id = " in sql
    assert "invoices.created_at >= " in sql
    assert "invoices.created_at <= " in sql
    assert "ORDER BY invoices.created_at DESC, invoices.id DESC" in sql
    params = list(_compiled(stmt).params.values())
    assert owner_id in params
    assert START in params
    assert END in params


@pytest.mark.asyncio
async def test_list_in_range_open_window_only_filters_by_owner(owner_id):
    db = _Db()

    await crud.list_invoices_in_range(db, owner_id, DateRange(start=START))

    sql = _sql(db.statements[0])
    assert "invoices.owner_id = " in sql
    assert "invoices.created_at >= " in sql
    assert "invoices.created_at <= " not in sql


@pytest.mark.asyncio
async def test_page_counts_and_fetches_only_the_owners_rows(owner_id):
    db = _Db(count=7)

    rows, total = await crud.list_invoices_page(db, owner_id, DateRange(START, END), page=3, limit=10)

    assert rows == []
    assert total == 7
    count_stmt, page_stmt = db.statements
    count_sql = _sql(count_stmt)
    assert "SELECT count(*)" in count_sql
    assert "FROM (SELECT" in count_sql
    assert "invoices.owner_id = " in count_sql
    assert "ORDER BY" not in count_sql
    page_sql = _sql(page_stmt)
    assert "invoices.owner_id = " in page_sql
    assert "ORDER BY invoices.created_at DESC, invoices.id DESC" in page_sql
    assert "LIMIT " in page_sql and "OFFSET " in page_sql
    page_params = _compiled(page_stmt).params
    assert owner_id in page_params.values()
    assert 10 in page_params.values()
    assert 20 in page_params.values()


@pytest.mark.asyncio
async def test_aggregate_is_scoped_to_owner_and_coalesces_empty_sums(owner_id):
    db = _Db()

    await crud.aggregate_invoices(db, owner_id, DateRange(START, END))

    [stmt] = db.statements
    sql = _sql(stmt)
    assert "count(invoices.id)" in sql
    assert "coalesce(sum(invoices.total)" in sql
    assert "coalesce(avg(invoices.rate_per_ton)" in sql
    assert "invoices.owner_id = " in sql
    assert "invoices.created_at >= " in sql
    assert owner_id in _compiled(stmt).params.values()


@pytest.mark.asyncio
async def test_get_for_owner_matches_id_and_owner(owner_id):
    db = _Db()

    found = await crud.get_invoice_for_owner(db, 42, owner_id)

    assert found is None
    [stmt] = db.statements
    sql = _sql(stmt)
    assert "invoices.id = " in sql
    assert "invoices.owner_id = " in sql
    params = _compiled(stmt).params.values()
    assert 42 in params
    assert owner_id in params
