from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol

from app.models.enums import TransactionType
from app.services.records import BudgetRecord, CategoryRecord, TransactionRecord


class TransactionSource(Protocol):
    async def fetch(
        self,
        owner_id: int,
        tx_type: TransactionType,
        *,
        category_id: int | None = None,
        start: dt.datetime | None = None,
        end: dt.datetime | None = None,
        newest_first: bool = False,
        limit: int | None = None,
    ) -> list[TransactionRecord]: ...

    async def total(self, owner_id: int, tx_type: TransactionType) -> Decimal: ...


class CategorySource(Protocol):
    async def resolve_names(self, owner_id: int, category_ids: Iterable[int]) -> dict[int, str]: ...

    async def list_by_owner_and_type(
        self,
        owner_id: int,
        tx_type: TransactionType | None = None,
    ) -> list[CategoryRecord]: ...

    async def fetch_by_id(self, category_id: int) -> CategoryRecord | None: ...


class BudgetSource(Protocol):
    async def fetch(
        self,
        owner_id: int,
        month: int | None = None,
        year: int | None = None,
        category_id: int | None = None,
    ) -> list[BudgetRecord]: ...

    async def fetch_by_id(self, budget_id: int) -> BudgetRecord | None: ...

    async def create(
        self,
        owner_id: int,
        category_id: int,
        amount: Decimal,
        month: int,
        year: int,
    ) -> BudgetRecord: ...

    async def save(self, budget: BudgetRecord) -> BudgetRecord: ...

    async def delete(self, budget_id: int) -> None: ...
