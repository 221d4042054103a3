from app.schemas.report import RecentTransactionItem
from app.services.activity import ActivityEntry


def serialize_activity_entry(entry: ActivityEntry) -> RecentTransactionItem:
    transaction = entry.transaction
    return RecentTransactionItem(
        id=transaction.id,
        type=entry.type,
        title=transaction.title,
        amount=transaction.amount,
        category_id=transaction.category_id,
        category_name=entry.category_name,
        description=transaction.description,
        occurred_at=transaction.occurred_at,
    )
