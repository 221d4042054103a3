from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_budget_source, get_category_source, get_owner_id, get_transaction_source
from app.schemas.budget import (
    BudgetCreate,
    BudgetListResponse,
    BudgetRead,
    BudgetStatusListResponse,
    BudgetStatusRead,
    BudgetUpdate,
)
from app.services.budget_status import evaluate_month, get_budget_status
from app.services.budgets import (
    create_budget,
    delete_budget,
    get_budget,
    list_budgets,
    serialize_budget,
    serialize_budget_status,
    update_budget,
)
from app.services.errors import DuplicateBudgetError, NotFoundError
from app.services.sources import BudgetSource, CategorySource, TransactionSource

router = APIRouter(prefix="/api/budgets", tags=["budgets"])


@router.get("", response_model=BudgetListResponse)
async def list_owner_budgets(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None),
    category_id: int | None = Query(default=None, ge=1),
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
) -> BudgetListResponse:
    rows = await list_budgets(owner_id, budgets, month=month, year=year, category_id=category_id)
    return BudgetListResponse(count=len(rows), budgets=[serialize_budget(item) for item in rows])


@router.get("/status", response_model=BudgetStatusListResponse)
async def month_budget_statuses(
    month: int = Query(ge=1, le=12),
    year: int = Query(),
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
    transactions: TransactionSource = Depends(get_transaction_source),
) -> BudgetStatusListResponse:
    batch = await evaluate_month(owner_id, month, year, budgets, transactions)
    return BudgetStatusListResponse(
        month=batch.month,
        year=batch.year,
        count=batch.count,
        budgets=[serialize_budget_status(item) for item in batch.statuses],
    )


@router.get("/{budget_id}", response_model=BudgetRead)
async def read_budget(
    budget_id: int,
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
) -> BudgetRead:
    try:
        budget = await get_budget(owner_id, budget_id, budgets)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return serialize_budget(budget)


@router.get("/{budget_id}/status", response_model=BudgetStatusRead)
async def read_budget_status(
    budget_id: int,
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
    transactions: TransactionSource = Depends(get_transaction_source),
) -> BudgetStatusRead:
    try:
        budget_status = await get_budget_status(owner_id, budget_id, budgets, transactions)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return serialize_budget_status(budget_status)


@router.post("", response_model=BudgetRead, status_code=status.HTTP_201_CREATED)
async def create_owner_budget(
    payload: BudgetCreate,
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
    categories: CategorySource = Depends(get_category_source),
) -> BudgetRead:
    try:
        budget = await create_budget(
            owner_id,
            payload.category_id,
            payload.amount,
            payload.month,
            payload.year,
            budgets,
            categories,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DuplicateBudgetError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return serialize_budget(budget)


@router.patch("/{budget_id}", response_model=BudgetRead)
async def update_owner_budget(
    budget_id: int,
    payload: BudgetUpdate,
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
) -> BudgetRead:
    if payload.amount is None and payload.month is None and payload.year is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="At least one field is required: amount, month or year",
        )

    try:
        budget = await update_budget(
            owner_id,
            budget_id,
            budgets,
            amount=payload.amount,
            month=payload.month,
            year=payload.year,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DuplicateBudgetError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return serialize_budget(budget)


@router.delete("/{budget_id}")
async def delete_owner_budget(
    budget_id: int,
    owner_id: int = Depends(get_owner_id),
    budgets: BudgetSource = Depends(get_budget_source),
) -> dict[str, str]:
    try:
        await delete_budget(owner_id, budget_id, budgets)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return {"status": "ok"}
