from decimal import Decimal

from pydantic import BaseModel, Field


class BudgetCategory(BaseModel):
    id: int
    name: str


class BudgetRead(BaseModel):
    id: int
    category: BudgetCategory
    amount: Decimal
    month: int
    year: int


class BudgetListResponse(BaseModel):
    count: int
    budgets: list[BudgetRead]


class BudgetStatusRead(BaseModel):
    budget: BudgetRead
    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    is_over_budget: bool
    expense_count: int


class BudgetStatusListResponse(BaseModel):
    month: int
    year: int
    count: int
    budgets: list[BudgetStatusRead]


class BudgetCreate(BaseModel):
    category_id: int = Field(ge=1)
    amount: Decimal = Field(ge=0)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1, le=9999)


class BudgetUpdate(BaseModel):
    amount: Decimal | None = Field(default=None, ge=0)
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=1, le=9999)
