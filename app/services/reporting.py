from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import TransactionType
from app.services.sources import TransactionSource


@dataclass(frozen=True, slots=True)
class Summary:
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal


def build_summary(total_income: Decimal, total_expenses: Decimal) -> Summary:
    return Summary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=total_income - total_expenses,
    )


async def summarize(owner_id: int, transactions: TransactionSource) -> Summary:
    # Totals are summed by the store rather than loading every transaction.
    total_income, total_expenses = await asyncio.gather(
        transactions.total(owner_id, TransactionType.INCOME),
        transactions.total(owner_id, TransactionType.EXPENSE),
    )
    return build_summary(total_income, total_expenses)
