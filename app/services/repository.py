"""SQLAlchemy-backed data sources.

Each query runs in its own session taken from the session factory, so the
services may issue several fetches concurrently.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.budget import Budget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.services.errors import DataSourceError, DuplicateBudgetError, NotFoundError
from app.services.records import BudgetRecord, CategoryRecord, TransactionRecord

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _query(session_factory: async_sessionmaker[AsyncSession], what: str) -> AsyncIterator[AsyncSession]:
    try:
        async with session_factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("Query for %s failed", what)
        raise DataSourceError(f"Query for {what} failed") from exc


async def _commit_budget(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        if "uq_budgets_owner_category_period" in str(exc.orig):
            raise DuplicateBudgetError("Budget already exists for this category and month") from exc
        raise


def _to_transaction_record(row: Transaction) -> TransactionRecord:
    return TransactionRecord(
        id=row.id,
        title=row.title,
        amount=row.amount,
        type=row.type,
        category_id=row.category_id,
        occurred_at=row.occurred_at,
        owner_id=row.owner_id,
        description=row.description,
    )


def _to_budget_record(budget: Budget, category_name: str) -> BudgetRecord:
    return BudgetRecord(
        id=budget.id,
        category_id=budget.category_id,
        category_name=category_name,
        amount=budget.amount,
        month=budget.month,
        year=budget.year,
        owner_id=budget.owner_id,
    )


class SqlTransactionSource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

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
    ) -> list[TransactionRecord]:
        filters = [Transaction.owner_id == owner_id, Transaction.type == tx_type]
        if category_id is not None:
            filters.append(Transaction.category_id == category_id)
        if start is not None:
            filters.append(Transaction.occurred_at >= start)
        if end is not None:
            filters.append(Transaction.occurred_at <= end)

        query = select(Transaction).where(*filters)
        if newest_first:
            query = query.order_by(Transaction.occurred_at.desc(), Transaction.id.desc())
        else:
            query = query.order_by(Transaction.occurred_at.asc(), Transaction.id.asc())
        if limit is not None:
            query = query.limit(limit)

        async with _query(self._session_factory, "transactions") as session:
            rows = await session.scalars(query)
            return [_to_transaction_record(row) for row in rows.all()]

    async def total(self, owner_id: int, tx_type: TransactionType) -> Decimal:
        async with _query(self._session_factory, "transactions") as session:
            total = await session.scalar(
                select(func.coalesce(func.sum(Transaction.amount), Decimal("0"))).where(
                    Transaction.owner_id == owner_id,
                    Transaction.type == tx_type,
                )
            )
            return total if total is not None else Decimal("0")


class SqlCategorySource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def resolve_names(self, owner_id: int, category_ids: Iterable[int]) -> dict[int, str]:
        ids = set(category_ids)
        if not ids:
            return {}

        async with _query(self._session_factory, "categories") as session:
            rows = await session.execute(
                select(Category.id, Category.name).where(Category.owner_id == owner_id, Category.id.in_(ids))
            )
            return {category_id: name for category_id, name in rows.all()}

    async def list_by_owner_and_type(
        self,
        owner_id: int,
        tx_type: TransactionType | None = None,
    ) -> list[CategoryRecord]:
        query = (
            select(Category)
            .where(Category.owner_id == owner_id)
            .order_by(Category.type.asc(), Category.name.asc())
        )
        if tx_type is not None:
            query = query.where(Category.type == tx_type)

        async with _query(self._session_factory, "categories") as session:
            rows = await session.scalars(query)
            return [
                CategoryRecord(id=item.id, name=item.name, type=item.type, owner_id=item.owner_id)
                for item in rows.all()
            ]

    async def fetch_by_id(self, category_id: int) -> CategoryRecord | None:
        async with _query(self._session_factory, "categories") as session:
            item = await session.get(Category, category_id)
            if item is None:
                return None
            return CategoryRecord(id=item.id, name=item.name, type=item.type, owner_id=item.owner_id)


class SqlBudgetSource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch(
        self,
        owner_id: int,
        month: int | None = None,
        year: int | None = None,
        category_id: int | None = None,
    ) -> list[BudgetRecord]:
        filters = [Budget.owner_id == owner_id]
        if month is not None:
            filters.append(Budget.month == month)
        if year is not None:
            filters.append(Budget.year == year)
        if category_id is not None:
            filters.append(Budget.category_id == category_id)

        async with _query(self._session_factory, "budgets") as session:
            rows = await session.execute(
                select(Budget, Category.name)
                .join(Category, Budget.category_id == Category.id)
                .where(*filters)
                .order_by(Category.name.asc(), Budget.id.asc())
            )
            return [_to_budget_record(budget, name) for budget, name in rows.all()]

    async def fetch_by_id(self, budget_id: int) -> BudgetRecord | None:
        async with _query(self._session_factory, "budgets") as session:
            row = (
                await session.execute(
                    select(Budget, Category.name)
                    .join(Category, Budget.category_id == Category.id)
                    .where(Budget.id == budget_id)
                )
            ).first()
            if row is None:
                return None
            budget, name = row
            return _to_budget_record(budget, name)

    async def create(
        self,
        owner_id: int,
        category_id: int,
        amount: Decimal,
        month: int,
        year: int,
    ) -> BudgetRecord:
        async with _query(self._session_factory, "budgets") as session:
            budget = Budget(owner_id=owner_id, category_id=category_id, amount=amount, month=month, year=year)
            session.add(budget)
            await _commit_budget(session)
            name = await session.scalar(select(Category.name).where(Category.id == category_id))
            return _to_budget_record(budget, name or "")

    async def save(self, budget: BudgetRecord) -> BudgetRecord:
        async with _query(self._session_factory, "budgets") as session:
            row = await session.get(Budget, budget.id)
            if row is None:
                raise NotFoundError("Budget", budget.id)

            row.amount = budget.amount
            row.month = budget.month
            row.year = budget.year
            await _commit_budget(session)
            return budget

    async def delete(self, budget_id: int) -> None:
        async with _query(self._session_factory, "budgets") as session:
            await session.execute(delete(Budget).where(Budget.id == budget_id))
            await session.commit()
