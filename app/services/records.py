from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import TransactionType


@dataclass(frozen=True, slots=True)
class CategoryRecord:
    id: int
    name: str
    type: TransactionType
    owner_id: int


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    id: int
    title: str
    amount: Decimal
    type: TransactionType
    category_id: int
    occurred_at: dt.datetime
    owner_id: int
    description: str | None = None


@dataclass(frozen=True, slots=True)
class BudgetRecord:
    id: int
    category_id: int
    category_name: str
    amount: Decimal
    month: int
    year: int
    owner_id: int
