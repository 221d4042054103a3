from fastapi import APIRouter, Depends, Query

from app.api.deps import get_category_source, get_owner_id
from app.models.enums import TransactionType
from app.schemas.category import CategoryRead
from app.services.sources import CategorySource

router = APIRouter(prefix="/api", tags=["categories"])


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(
    type: TransactionType | None = Query(default=None),
    owner_id: int = Depends(get_owner_id),
    categories: CategorySource = Depends(get_category_source),
) -> list[CategoryRead]:
    rows = await categories.list_by_owner_and_type(owner_id, type)
    return [CategoryRead(id=item.id, name=item.name, type=item.type) for item in rows]
