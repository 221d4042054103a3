"""Budget status: actual spending of a budget's category against its monthly limit."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import TransactionType
from app.services.errors import InvalidRangeError, NotFoundError
from app.services.month import month_bounds, round2
from app.services.records import BudgetRecord
from app.services.sources import BudgetSource, TransactionSource

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    budget: BudgetRecord
    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    is_over_budget: bool
    expense_count: int


@dataclass(frozen=True, slots=True)
class BudgetStatusBatch:
    month: int
    year: int
    count: int
    statuses: list[BudgetStatus]


def compute_status(budget: BudgetRecord, amounts: list[Decimal]) -> BudgetStatus:
    spent = sum(amounts, _ZERO)
    if budget.amount > 0:
        percentage_used = round2(spent / budget.amount * _HUNDRED)
    else:
        percentage_used = round2(_ZERO)

    return BudgetStatus(
        budget=budget,
        spent=spent,
        remaining=budget.amount - spent,
        percentage_used=percentage_used,
        is_over_budget=spent > budget.amount,
        expense_count=len(amounts),
    )


async def evaluate_budget(budget: BudgetRecord, transactions: TransactionSource) -> BudgetStatus:
    start, end = month_bounds(budget.year, budget.month)
    expenses = await transactions.fetch(
        budget.owner_id,
        TransactionType.EXPENSE,
        category_id=budget.category_id,
        start=start,
        end=end,
    )
    status = compute_status(budget, [item.amount for item in expenses])
    logger.debug(
        "Budget %d (%s %04d-%02d): spent=%s of %s",
        budget.id,
        budget.category_name,
        budget.year,
        budget.month,
        status.spent,
        budget.amount,
    )
    return status


async def get_budget_status(
    owner_id: int,
    budget_id: int,
    budgets: BudgetSource,
    transactions: TransactionSource,
) -> BudgetStatus:
    budget = await budgets.fetch_by_id(budget_id)
    if budget is None or budget.owner_id != owner_id:
        raise NotFoundError("Budget", budget_id)

    return await evaluate_budget(budget, transactions)


async def evaluate_month(
    owner_id: int,
    month: int,
    year: int,
    budgets: BudgetSource,
    transactions: TransactionSource,
) -> BudgetStatusBatch:
    if not 1 <= month <= 12:
        raise InvalidRangeError("Month must be between 1 and 12")

    rows = await budgets.fetch(owner_id, month=month, year=year)
    # gather keeps results in the order of its arguments
    statuses = await asyncio.gather(*(evaluate_budget(budget, transactions) for budget in rows))

    return BudgetStatusBatch(month=month, year=year, count=len(statuses), statuses=list(statuses))
