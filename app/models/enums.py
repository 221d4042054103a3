from enum import Enum

from sqlalchemy.dialects.postgresql import ENUM


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


transaction_type_enum = ENUM(
    TransactionType,
    name="transaction_type",
    create_type=False,
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)
