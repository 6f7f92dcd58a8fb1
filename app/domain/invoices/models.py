import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Identity, Text, ForeignKey, Numeric, TIMESTAMP, Integer, BigInteger, CheckConstraint, Index, \
    Uuid, text
from app.core.database import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    invoice_number: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    company_phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_address: Mapped[str] = mapped_column(Text, nullable=False)
    company_gst: Mapped[str] = mapped_column(Text, nullable=False)
    rate_per_ton: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    trucks: Mapped[int] = mapped_column(Integer, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("owner.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True),
                                                 default=lambda: datetime.now(timezone.utc),
                                                 server_default=text("timezone('utc', now())"),
                                                 nullable=False)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True),
                                                 default=lambda: datetime.now(timezone.utc),
                                                 onupdate=lambda: datetime.now(timezone.utc),
                                                 server_default=text("timezone('utc', now())"),
                                                 nullable=False)

    __table_args__ = (
        CheckConstraint("rate_per_ton >= 0", name="chk_rate_per_ton_nonneg"),
        CheckConstraint("trucks >= 0", name="chk_trucks_nonneg"),
        CheckConstraint("total = rate_per_ton * trucks", name="chk_total_is_rate_times_trucks"),
        Index("ix_invoices_owner_created_at", "owner_id", "created_at"),
    )
