from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import TransactionType
from app.services.month import resolve_date_range
from app.services.records import TransactionRecord
from app.services.sources import CategorySource, TransactionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CategoryRollup:
    category_name: str
    total_amount: Decimal
    count: int


def aggregate_by_category(
    transactions: Iterable[TransactionRecord],
    resolve_name: Callable[[int], str | None],
) -> list[CategoryRollup]:
    """Group transactions by category name and sort by total, largest first.

    Categories are keyed by name, so two categories sharing a name collapse into
    one rollup. Transactions whose category does not resolve are skipped.
    Equal totals are ordered by name.
    """
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}

    for transaction in transactions:
        name = resolve_name(transaction.category_id)
        if name is None:
            continue
        totals[name] = totals.get(name, Decimal("0")) + transaction.amount
        counts[name] = counts.get(name, 0) + 1

    rollups = [
        CategoryRollup(category_name=name, total_amount=total, count=counts[name])
        for name, total in totals.items()
    ]
    rollups.sort(key=lambda item: (-item.total_amount, item.category_name))
    return rollups


async def category_rollup(
    owner_id: int,
    tx_type: TransactionType,
    transactions: TransactionSource,
    categories: CategorySource,
    start: dt.datetime | None = None,
    end: dt.datetime | None = None,
) -> list[CategoryRollup]:
    start, end = resolve_date_range(start, end)
    rows = await transactions.fetch(owner_id, tx_type, start=start, end=end)
    names = await categories.resolve_names(owner_id, {item.category_id for item in rows})

    skipped = sum(1 for item in rows if item.category_id not in names)
    if skipped:
        logger.warning(
            "Skipped %d %s transaction(s) with unknown category for owner %d",
            skipped,
            tx_type.value,
            owner_id,
        )

    return aggregate_by_category(rows, names.get)
