from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from app.core.dates import TZ

CURRENCY_PREFIX = "Rs."


def plain_number(value: Decimal | int) -> str:
    """850.50 -> '850.5', 4250.00 -> '4250'."""
    if isinstance(value, int):
        return str(value)
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal("1")))
    return format(normalized, "f")


def _group_indian(whole: str) -> str:
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Decimal | int) -> str:
    value = Decimal(amount)
    sign = "-" if value < 0 else ""
    value = abs(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    whole, _, fraction = f"{value:f}".partition(".")
    text = _group_indian(whole)
    if fraction.strip("0"):
        text = f"{text}.{fraction}"
    return f"{sign}{CURRENCY_PREFIX} {text}"


def format_date(value: datetime, tz: tzinfo = TZ) -> str:
    return value.astimezone(tz).strftime("%d/%m/%Y")


def format_time(value: datetime, tz: tzinfo = TZ) -> str:
    return value.astimezone(tz).strftime("%I:%M %p")
