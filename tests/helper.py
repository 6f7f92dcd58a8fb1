from datetime import datetime, timezone
from decimal import Decimal
from app.domain.invoices.models import Invoice


def db_with_scalars_first(mocker, value):
    res = mocker.Mock()
    res.scalars.return_value.first.return_value = value
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def db_with_execute_one(mocker, row):
    res = mocker.Mock()
    res.one.return_value = row
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def make_invoice(
        owner_id,
        *,
        id: int = 1,
        invoice_number: int = 1001,
        company_name: str = "ABC Transport",
        company_phone: str | None = None,
        company_address: str = "X",
        company_gst: str = "Y",
        rate_per_ton: str = "850",
        trucks: int = 5,
        notes: str | None = None,
        created_at: datetime | None = None
) -> Invoice:
    created_at = created_at or datetime(2025, 8, 18, 6, 30, tzinfo=timezone.utc)
    rate = Decimal(rate_per_ton)
    return Invoice(
        id=id,
        invoice_number=invoice_number,
        company_name=company_name,
        company_phone=company_phone,
        company_address=company_address,
        company_gst=company_gst,
        rate_per_ton=rate,
        trucks=trucks,
        total=rate * trucks,
        notes=notes,
        owner_id=owner_id,
        created_at=created_at,
        updated_at=created_at,
    )


class FakePipeline:
    def __init__(self, store: dict, error: Exception | None):
        self.store = store
        self.error = error
        self.ops = []

    def set(self, key, value, ex=None, nx=False):
        self.ops.append(("set", key, value, nx))

    def incr(self, key):
        self.ops.append(("incr", key))

    def ttl(self, key):
        self.ops.append(("ttl", key))

    async def execute(self):
        if self.error is not None:
            raise self.error
        out = []
        for op in self.ops:
            if op[0] == "set":
                _, key, value, nx = op
                if nx and key in self.store:
                    out.append(None)
                else:
                    self.store[key] = value
                    out.append(True)
            elif op[0] == "incr":
                self.store[op[1]] = self.store.get(op[1], 0) + 1
                out.append(self.store[op[1]])
            else:
                out.append(42)
        return out


class FakeRedis:
    def __init__(self, error: Exception | None = None):
        self.store = {}
        self.error = error

    def pipeline(self):
        return FakePipeline(self.store, self.error)
