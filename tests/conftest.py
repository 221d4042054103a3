import pytest

from app.models.enums import TransactionType
from app.services.records import CategoryRecord
from tests.fakes import OTHER_OWNER_ID, OWNER_ID, FakeCategorySource


@pytest.fixture
def categories() -> FakeCategorySource:
    return FakeCategorySource(
        [
            CategoryRecord(id=1, name="Food", type=TransactionType.EXPENSE, owner_id=OWNER_ID),
            CategoryRecord(id=2, name="Rent", type=TransactionType.EXPENSE, owner_id=OWNER_ID),
            CategoryRecord(id=3, name="Salary", type=TransactionType.INCOME, owner_id=OWNER_ID),
            CategoryRecord(id=4, name="Gift", type=TransactionType.INCOME, owner_id=OWNER_ID),
            CategoryRecord(id=5, name="Food", type=TransactionType.EXPENSE, owner_id=OTHER_OWNER_ID),
        ]
    )
