from typing import Annotated
from fastapi import Query
from app.core.dates import DateRange, parse_date_range
from app.domain.exceptions import InvalidInput


def date_range_query(
        from_: Annotated[str | None, Query(alias="from")] = None,
        to: Annotated[str | None, Query()] = None
) -> DateRange:
    return parse_date_range(from_, to)


def required_date_range_query(
        from_: Annotated[str | None, Query(alias="from")] = None,
        to: Annotated[str | None, Query()] = None
) -> DateRange:
    if not from_ or not to:
        raise InvalidInput("from and to date are required for export", ctx={"from": from_, "to": to})
    return parse_date_range(from_, to)
