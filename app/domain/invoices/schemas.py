from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator, model_validator
from pydantic.alias_generators import to_camel
from app.core.text_utils import strip_text


MAX_TRUCKS = 2_147_483_647
MAX_TOTAL = Decimal("99999999999999.99")

Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class InvoiceCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid', alias_generator=to_camel, populate_by_name=True)

    company_name: str = Field(min_length=1, max_length=200)
    company_phone: str | None = Field(default=None, max_length=40)
    company_address: str = Field(min_length=1, max_length=500)
    company_gst: str = Field(min_length=1, max_length=32)
    rate_per_ton: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    trucks: int = Field(ge=0, le=MAX_TRUCKS)
    notes: str | None = Field(default=None, max_length=2000)

    _strip_company_name = field_validator("company_name", mode="before")(strip_text)
    _strip_company_phone = field_validator("company_phone", mode="before")(strip_text)
    _strip_company_address = field_validator("company_address", mode="before")(strip_text)
    _strip_company_gst = field_validator("company_gst", mode="before")(strip_text)
    _strip_notes = field_validator("notes", mode="before")(strip_text)

    @field_validator("rate_per_ton", "trucks", mode="before")
    @classmethod
    def _reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("Must be a number")
        return v

    @model_validator(mode="after")
    def _total_fits(self):
        if self.rate_per_ton * self.trucks > MAX_TOTAL:
            raise ValueError(f"ratePerTon x trucks must not exceed {MAX_TOTAL}")
        return self


class InvoiceReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    invoice_number: int
    company_name: str
    company_phone: str | None = None
    company_address: str
    company_gst: str
    rate_per_ton: Money
    trucks: int
    total: Money
    notes: str | None = None
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
