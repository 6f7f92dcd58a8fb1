from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from sqlalchemy import select, func
from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")

DEFAULT_LIMIT = 50
MAX_LIMIT = 500


class PageQueryDTO(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)


class PageDTO(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: list[T]
    page: int
    limit: int
    total: int

    @computed_field
    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 1
        return max(1, (self.total + self.limit - 1) // self.limit)

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.pages


async def paginate(
        db: AsyncSession,
        base_stmt,
        *,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        where: list[Any] | None = None,
        order_by: list[Any] | None = None
) -> tuple[list[Any], int]:
    page = max(1, int(page))
    limit = max(1, min(MAX_LIMIT, int(limit)))

    stmt = base_stmt
    if where:
        stmt = stmt.where(*where)
    if order_by:
        stmt = stmt.order_by(*order_by)

    total_subquery = stmt.order_by(None).limit(None).offset(None)
    total = await db.scalar(select(func.count()).select_from(total_subquery.subquery()))

    stmt = stmt.limit(limit).offset((page - 1) * limit)
    result = await db.scalars(stmt)
    return list(result.all()), int(total or 0)
