import calendar
import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

from app.services.errors import InvalidRangeError

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_CENT = Decimal("0.01")


def month_bounds(year: int, month: int) -> tuple[dt.datetime, dt.datetime]:
    """Return the first and the last instant of a calendar month, both inclusive."""
    if not 1 <= month <= 12:
        raise ValueError("Month must be between 1 and 12")

    start = dt.datetime(year, month, 1)
    _, days_in_month = calendar.monthrange(year, month)
    end = dt.datetime.combine(dt.date(year, month, days_in_month), dt.time.max)
    return start, end


def month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year:04d}"


def round2(value: Decimal) -> Decimal:
    # ROUND_HALF_UP on Decimal rounds ties away from zero for both signs.
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_naive_utc(value: dt.datetime | None) -> dt.datetime | None:
    """Instants are stored as naive UTC; aware inputs are converted."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def resolve_date_range(
    start: dt.datetime | None,
    end: dt.datetime | None,
) -> tuple[dt.datetime | None, dt.datetime | None]:
    start = to_naive_utc(start)
    end = to_naive_utc(end)
    if start is not None and end is not None and start > end:
        raise InvalidRangeError("start_date must not be later than end_date")
    return start, end
