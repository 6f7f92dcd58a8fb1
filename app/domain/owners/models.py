import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Text, TIMESTAMP, Integer, CheckConstraint, UniqueConstraint, Uuid, text
from app.core.database import Base


class Owner(Base):
    __tablename__ = "owner"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    slot: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default=text("1"))
    access_code_hash: Mapped[str] = mapped_column(Text, nullable=False)
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
        UniqueConstraint("slot", name="uq_owner_singleton"),
        CheckConstraint("slot = 1", name="chk_owner_singleton"),
    )
