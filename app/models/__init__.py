from app.models.budget import Budget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction

__all__ = [
    "Budget",
    "Category",
    "Transaction",
    "TransactionType",
]
