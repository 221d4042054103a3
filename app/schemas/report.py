import datetime as dt
from decimal import Decimal

from pydantic import BaseModel

from app.models.enums import TransactionType


class SummaryResponse(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal


class CategoryRollupItem(BaseModel):
    category_name: str
    total_amount: Decimal
    count: int


class MonthlyBucketItem(BaseModel):
    month: str
    total_income: Decimal
    total_expenses: Decimal


class RecentTransactionItem(BaseModel):
    id: int
    type: TransactionType
    title: str
    amount: Decimal
    category_id: int
    category_name: str | None
    description: str | None
    occurred_at: dt.datetime
