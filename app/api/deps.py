from fastapi import Header, HTTPException, status

from app.db.session import AsyncSessionLocal
from app.services.repository import SqlBudgetSource, SqlCategorySource, SqlTransactionSource
from app.services.sources import BudgetSource, CategorySource, TransactionSource


def get_owner_id(x_owner_id: int | None = Header(default=None, ge=1)) -> int:
    # Identity is resolved upstream; the gateway forwards the owner id.
    if x_owner_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return x_owner_id


def get_transaction_source() -> TransactionSource:
    return SqlTransactionSource(AsyncSessionLocal)


def get_category_source() -> CategorySource:
    return SqlCategorySource(AsyncSessionLocal)


def get_budget_source() -> BudgetSource:
    return SqlBudgetSource(AsyncSessionLocal)
