from app.schemas.budget import (
    BudgetCategory,
    BudgetCreate,
    BudgetListResponse,
    BudgetRead,
    BudgetStatusListResponse,
    BudgetStatusRead,
    BudgetUpdate,
)
from app.schemas.category import CategoryRead
from app.schemas.report import CategoryRollupItem, MonthlyBucketItem, RecentTransactionItem, SummaryResponse

__all__ = [
    "BudgetCategory",
    "BudgetCreate",
    "BudgetListResponse",
    "BudgetRead",
    "BudgetStatusListResponse",
    "BudgetStatusRead",
    "BudgetUpdate",
    "CategoryRead",
    "CategoryRollupItem",
    "MonthlyBucketItem",
    "RecentTransactionItem",
    "SummaryResponse",
]
