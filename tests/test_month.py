import datetime as dt
from decimal import Decimal

import pytest

from app.services.errors import InvalidRangeError
from app.services.month import month_bounds, month_label, resolve_date_range, round2


def test_month_bounds_cover_whole_month() -> None:
    start, end = month_bounds(2024, 3)

    assert start == dt.datetime(2024, 3, 1)
    assert end == dt.datetime(2024, 3, 31, 23, 59, 59, 999999)


def test_month_bounds_handle_leap_february() -> None:
    _, end = month_bounds(2024, 2)

    assert end.date() == dt.date(2024, 2, 29)


def test_month_bounds_end_december_on_new_years_eve() -> None:
    start, end = month_bounds(2023, 12)

    assert start == dt.datetime(2023, 12, 1)
    assert end.date() == dt.date(2023, 12, 31)


def test_month_bounds_reject_invalid_month() -> None:
    with pytest.raises(ValueError, match="between 1 and 12"):
        month_bounds(2024, 13)


def test_month_label_uses_short_english_names() -> None:
    assert month_label(2024, 3) == "Mar 2024"
    assert month_label(2025, 12) == "Dec 2025"


def test_round2_rounds_half_away_from_zero() -> None:
    assert round2(Decimal("0.125")) == Decimal("0.13")
    assert round2(Decimal("-0.125")) == Decimal("-0.13")
    assert round2(Decimal("33.3333")) == Decimal("33.33")


def test_resolve_date_range_rejects_inverted_range() -> None:
    with pytest.raises(InvalidRangeError):
        resolve_date_range(dt.datetime(2024, 4, 1), dt.datetime(2024, 3, 1))


def test_resolve_date_range_converts_aware_values_to_naive_utc() -> None:
    aware = dt.datetime(2024, 3, 1, 5, 0, tzinfo=dt.timezone(dt.timedelta(hours=5)))

    start, end = resolve_date_range(aware, None)

    assert start == dt.datetime(2024, 3, 1, 0, 0)
    assert end is None


def test_month_bounds_for_last_representable_december() -> None:
    start, end = month_bounds(9999, 12)

    assert start == dt.datetime(9999, 12, 1)
    assert end == dt.datetime(9999, 12, 31, 23, 59, 59, 999999)
