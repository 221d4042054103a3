import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_category_source, get_owner_id, get_transaction_source
from app.db.settings import get_settings
from app.models.enums import TransactionType
from app.schemas.report import CategoryRollupItem, MonthlyBucketItem, RecentTransactionItem, SummaryResponse
from app.services.activity import recent_activity
from app.services.errors import InvalidRangeError
from app.services.monthly import monthly_summary
from app.services.reporting import summarize
from app.services.rollups import category_rollup
from app.services.sources import CategorySource, TransactionSource
from app.services.transactions import serialize_activity_entry

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=SummaryResponse)
async def summary_report(
    owner_id: int = Depends(get_owner_id),
    transactions: TransactionSource = Depends(get_transaction_source),
) -> SummaryResponse:
    summary = await summarize(owner_id, transactions)
    return SummaryResponse(
        total_income=summary.total_income,
        total_expenses=summary.total_expenses,
        net_balance=summary.net_balance,
    )


async def _rollup_report(
    tx_type: TransactionType,
    owner_id: int,
    start_date: dt.datetime | None,
    end_date: dt.datetime | None,
    transactions: TransactionSource,
    categories: CategorySource,
) -> list[CategoryRollupItem]:
    try:
        rollups = await category_rollup(owner_id, tx_type, transactions, categories, start=start_date, end=end_date)
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    return [
        CategoryRollupItem(category_name=item.category_name, total_amount=item.total_amount, count=item.count)
        for item in rollups
    ]


@router.get("/expenses-by-category", response_model=list[CategoryRollupItem])
async def expenses_by_category(
    start_date: dt.datetime | None = Query(default=None),
    end_date: dt.datetime | None = Query(default=None),
    owner_id: int = Depends(get_owner_id),
    transactions: TransactionSource = Depends(get_transaction_source),
    categories: CategorySource = Depends(get_category_source),
) -> list[CategoryRollupItem]:
    return await _rollup_report(TransactionType.EXPENSE, owner_id, start_date, end_date, transactions, categories)


@router.get("/income-by-category", response_model=list[CategoryRollupItem])
async def income_by_category(
    start_date: dt.datetime | None = Query(default=None),
    end_date: dt.datetime | None = Query(default=None),
    owner_id: int = Depends(get_owner_id),
    transactions: TransactionSource = Depends(get_transaction_source),
    categories: CategorySource = Depends(get_category_source),
) -> list[CategoryRollupItem]:
    return await _rollup_report(TransactionType.INCOME, owner_id, start_date, end_date, transactions, categories)


@router.get("/monthly", response_model=list[MonthlyBucketItem])
async def monthly_report(
    start_date: dt.datetime | None = Query(default=None),
    end_date: dt.datetime | None = Query(default=None),
    owner_id: int = Depends(get_owner_id),
    transactions: TransactionSource = Depends(get_transaction_source),
) -> list[MonthlyBucketItem]:
    try:
        buckets = await monthly_summary(owner_id, transactions, start=start_date, end=end_date)
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    return [
        MonthlyBucketItem(month=item.month_label, total_income=item.total_income, total_expenses=item.total_expenses)
        for item in buckets
    ]


@router.get("/recent", response_model=list[RecentTransactionItem])
async def recent_transactions(
    limit: int | None = Query(default=None, ge=1),
    owner_id: int = Depends(get_owner_id),
    transactions: TransactionSource = Depends(get_transaction_source),
    categories: CategorySource = Depends(get_category_source),
) -> list[RecentTransactionItem]:
    settings = get_settings()
    if limit is None:
        limit = settings.recent_limit_default
    limit = min(limit, settings.recent_limit_max)

    entries = await recent_activity(owner_id, limit, transactions, categories)
    return [serialize_activity_entry(entry) for entry in entries]
