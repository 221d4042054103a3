import dataclasses
import logging
from decimal import Decimal

from app.models.enums import TransactionType
from app.schemas.budget import BudgetCategory, BudgetRead, BudgetStatusRead
from app.services.budget_status import BudgetStatus
from app.services.errors import NotFoundError
from app.services.records import BudgetRecord
from app.services.sources import BudgetSource, CategorySource

logger = logging.getLogger(__name__)


async def list_budgets(
    owner_id: int,
    budgets: BudgetSource,
    month: int | None = None,
    year: int | None = None,
    category_id: int | None = None,
) -> list[BudgetRecord]:
    rows = await budgets.fetch(owner_id, month=month, year=year, category_id=category_id)
    return sorted(rows, key=lambda item: (-item.year, -item.month, item.category_name, item.id))


async def get_budget(owner_id: int, budget_id: int, budgets: BudgetSource) -> BudgetRecord:
    budget = await budgets.fetch_by_id(budget_id)
    if budget is None or budget.owner_id != owner_id:
        raise NotFoundError("Budget", budget_id)
    return budget


async def create_budget(
    owner_id: int,
    category_id: int,
    amount: Decimal,
    month: int,
    year: int,
    budgets: BudgetSource,
    categories: CategorySource,
) -> BudgetRecord:
    """Create a budget for one of the owner's expense categories.

    Raises NotFoundError when the category is missing, belongs to another owner
    or is an income category, and DuplicateBudgetError when the owner already
    has a budget for that category and month.
    """
    category = await categories.fetch_by_id(category_id)
    if category is None or category.owner_id != owner_id or category.type != TransactionType.EXPENSE:
        raise NotFoundError("Expense category", category_id)

    budget = await budgets.create(owner_id, category_id, amount, month, year)
    logger.info("Created budget %d for owner %d (%s %04d-%02d)", budget.id, owner_id, category.name, year, month)
    return budget


async def update_budget(
    owner_id: int,
    budget_id: int,
    budgets: BudgetSource,
    amount: Decimal | None = None,
    month: int | None = None,
    year: int | None = None,
) -> BudgetRecord:
    current = await get_budget(owner_id, budget_id, budgets)
    updated = dataclasses.replace(
        current,
        amount=current.amount if amount is None else amount,
        month=current.month if month is None else month,
        year=current.year if year is None else year,
    )
    return await budgets.save(updated)


async def delete_budget(owner_id: int, budget_id: int, budgets: BudgetSource) -> None:
    await get_budget(owner_id, budget_id, budgets)
    await budgets.delete(budget_id)
    logger.info("Deleted budget %d for owner %d", budget_id, owner_id)


def serialize_budget(budget: BudgetRecord) -> BudgetRead:
    return BudgetRead(
        id=budget.id,
        category=BudgetCategory(id=budget.category_id, name=budget.category_name),
        amount=budget.amount,
        month=budget.month,
        year=budget.year,
    )


def serialize_budget_status(status: BudgetStatus) -> BudgetStatusRead:
    return BudgetStatusRead(
        budget=serialize_budget(status.budget),
        spent=status.spent,
        remaining=status.remaining,
        percentage_used=status.percentage_used,
        is_over_budget=status.is_over_budget,
        expense_count=status.expense_count,
    )
