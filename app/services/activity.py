from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from app.models.enums import TransactionType
from app.services.errors import InvalidRangeError
from app.services.records import TransactionRecord
from app.services.sources import CategorySource, TransactionSource


@dataclass(frozen=True, slots=True)
class ActivityEntry:
    type: TransactionType
    transaction: TransactionRecord
    category_name: str | None = None


def merge_recent(
    expenses: Sequence[TransactionRecord],
    incomes: Sequence[TransactionRecord],
    limit: int,
    category_names: Mapping[int, str] | None = None,
) -> list[ActivityEntry]:
    """Merge two newest-first feeds into one feed of at most ``limit`` entries.

    The sort is stable and expenses are placed first, so on equal timestamps an
    expense precedes an income and each feed keeps its own order.
    """
    names = category_names or {}
    tagged = [
        ActivityEntry(type=TransactionType.EXPENSE, transaction=item, category_name=names.get(item.category_id))
        for item in expenses
    ]
    tagged.extend(
        ActivityEntry(type=TransactionType.INCOME, transaction=item, category_name=names.get(item.category_id))
        for item in incomes
    )
    tagged.sort(key=lambda entry: entry.transaction.occurred_at, reverse=True)
    return tagged[:limit]


async def recent_activity(
    owner_id: int,
    limit: int,
    transactions: TransactionSource,
    categories: CategorySource,
) -> list[ActivityEntry]:
    if limit < 1:
        raise InvalidRangeError("limit must be a positive integer")

    expenses, incomes = await asyncio.gather(
        transactions.fetch(owner_id, TransactionType.EXPENSE, newest_first=True, limit=limit),
        transactions.fetch(owner_id, TransactionType.INCOME, newest_first=True, limit=limit),
    )
    names = await categories.resolve_names(
        owner_id,
        {item.category_id for item in expenses} | {item.category_id for item in incomes},
    )
    return merge_recent(expenses, incomes, limit, names)
