from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo
from app.core.config import REPORTING_TZ
from app.domain.exceptions import InvalidInput


TZ = ZoneInfo(REPORTING_TZ)
_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window on created_at; either side may be open."""

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


def _parse_iso(value: str) -> date | datetime:
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidInput("Invalid date", ctx={"value": value})


def start_of_day(day: date, tz: tzinfo = TZ) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo = TZ) -> datetime:
    return start_of_day(day + timedelta(days=1), tz) - _TICK


def parse_date(value: str) -> date:
    parsed = _parse_iso(value)
    return parsed.date() if isinstance(parsed, datetime) else parsed


def parse_instant(value: str, *, end_of_day_if_date: bool = False, tz: tzinfo = TZ) -> datetime:
    parsed = _parse_iso(value)
    if not isinstance(parsed, datetime):
        return end_of_day(parsed, tz) if end_of_day_if_date else start_of_day(parsed, tz)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def parse_date_range(start: str | None, end: str | None, *, tz: tzinfo = TZ) -> DateRange:
    start_at = parse_instant(start, tz=tz) if start else None
    end_at = parse_instant(end, end_of_day_if_date=True, tz=tz) if end else None
    if start_at and end_at and start_at > end_at:
        raise InvalidInput("'from' must not be after 'to'", ctx={"from": start, "to": end})
    return DateRange(start=start_at, end=end_at)


def day_range(day: date, tz: tzinfo = TZ) -> DateRange:
    return DateRange(start=start_of_day(day, tz), end=end_of_day(day, tz))


def month_range(year: int, month: int, tz: tzinfo = TZ) -> DateRange:
    first = date(year, month, 1)
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return DateRange(start=start_of_day(first, tz), end=start_of_day(next_first, tz) - _TICK)


def year_range(year: int, tz: tzinfo = TZ) -> DateRange:
    return DateRange(start=start_of_day(date(year, 1, 1), tz), end=start_of_day(date(year + 1, 1, 1), tz) - _TICK)


def local_now(tz: tzinfo = TZ) -> datetime:
    return datetime.now(timezone.utc).astimezone(tz)
