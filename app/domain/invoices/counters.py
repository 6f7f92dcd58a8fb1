from sqlalchemy import Table, Column, Text, BigInteger, CheckConstraint
from app.core.database import Base

counters = Table(
    "counters",
    Base.metadata,
    Column("key", Text, primary_key=True),
    Column("value", BigInteger, nullable=False),
    CheckConstraint("value >= 0", name="chk_counter_nonneg"),
)
