from __future__ import annotations

import asyncio
import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import TransactionType
from app.services.month import month_label, resolve_date_range
from app.services.records import TransactionRecord
from app.services.sources import TransactionSource

_ZERO = Decimal("0")

MonthKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class MonthlyBucket:
    year: int
    month: int
    month_label: str
    total_income: Decimal
    total_expenses: Decimal


def group_by_month(transactions: Iterable[TransactionRecord]) -> dict[MonthKey, Decimal]:
    totals: dict[MonthKey, Decimal] = {}
    for transaction in transactions:
        key = (transaction.occurred_at.year, transaction.occurred_at.month)
        totals[key] = totals.get(key, _ZERO) + transaction.amount
    return totals


def merge_monthly(
    expense_totals: Mapping[MonthKey, Decimal],
    income_totals: Mapping[MonthKey, Decimal],
) -> list[MonthlyBucket]:
    keys = sorted(set(expense_totals) | set(income_totals))
    return [
        MonthlyBucket(
            year=year,
            month=month,
            month_label=month_label(year, month),
            total_income=income_totals.get((year, month), _ZERO),
            total_expenses=expense_totals.get((year, month), _ZERO),
        )
        for year, month in keys
    ]


async def monthly_summary(
    owner_id: int,
    transactions: TransactionSource,
    start: dt.datetime | None = None,
    end: dt.datetime | None = None,
) -> list[MonthlyBucket]:
    start, end = resolve_date_range(start, end)
    expenses, incomes = await asyncio.gather(
        transactions.fetch(owner_id, TransactionType.EXPENSE, start=start, end=end),
        transactions.fetch(owner_id, TransactionType.INCOME, start=start, end=end),
    )
    return merge_monthly(group_by_month(expenses), group_by_month(incomes))
