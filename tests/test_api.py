import datetime as dt

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_budget_source, get_category_source, get_transaction_source
from app.main import app
from app.models.enums import TransactionType
from app.services.errors import DataSourceError
from tests.fakes import OTHER_OWNER_ID, FakeBudgetSource, FakeTransactionSource, make_budget, make_tx

HEADERS = {"X-Owner-Id": "1"}


class FailingTransactionSource:
    async def fetch(self, *args, **kwargs):
        raise DataSourceError("Query for transactions failed")

    async def total(self, *args, **kwargs):
        raise DataSourceError("Query for transactions failed")


@pytest.fixture
def client(categories):
    transactions = FakeTransactionSource(
        [
            make_tx(1, "300", dt.datetime(2024, 3, 5), category_id=1),
            make_tx(2, "450", dt.datetime(2024, 3, 20), category_id=1),
            make_tx(3, "1000", dt.datetime(2024, 3, 1), category_id=2),
            make_tx(4, "2000", dt.datetime(2024, 3, 1), tx_type=TransactionType.INCOME, category_id=3),
            make_tx(5, "2000", dt.datetime(2024, 4, 1), tx_type=TransactionType.INCOME, category_id=3),
        ]
    )
    budgets = FakeBudgetSource(
        [
            make_budget(1, "1000", category_id=1, category_name="Food"),
            make_budget(2, "500", category_id=2, category_name="Rent"),
            make_budget(3, "200", owner_id=OTHER_OWNER_ID),
        ],
        category_names={1: "Food", 2: "Rent"},
    )
    app.dependency_overrides[get_transaction_source] = lambda: transactions
    app.dependency_overrides[get_category_source] = lambda: categories
    app.dependency_overrides[get_budget_source] = lambda: budgets
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_requests_without_owner_are_rejected(client) -> None:
    response = client.get("/api/reports/summary")

    assert response.status_code == 401


def test_budget_status_endpoint(client) -> None:
    response = client.get("/api/budgets/1/status", headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["budget"]["category"] == {"id": 1, "name": "Food"}
    assert body["spent"] == "750"
    assert body["remaining"] == "250"
    assert body["percentage_used"] == "75.00"
    assert body["is_over_budget"] is False
    assert body["expense_count"] == 2


def test_budget_status_of_other_owner_is_not_found(client) -> None:
    response = client.get("/api/budgets/3/status", headers=HEADERS)

    assert response.status_code == 404


def test_month_statuses_endpoint(client) -> None:
    response = client.get("/api/budgets/status", params={"month": 3, "year": 2024}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [item["budget"]["id"] for item in body["budgets"]] == [1, 2]
    assert body["budgets"][1]["is_over_budget"] is True
    assert body["budgets"][1]["percentage_used"] == "200.00"


def test_month_statuses_require_valid_month(client) -> None:
    response = client.get("/api/budgets/status", params={"month": 13, "year": 2024}, headers=HEADERS)

    assert response.status_code == 422


def test_list_budgets_endpoint(client) -> None:
    response = client.get("/api/budgets", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["count"] == 2


def test_expenses_by_category_endpoint(client) -> None:
    response = client.get("/api/reports/expenses-by-category", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == [
        {"category_name": "Rent", "total_amount": "1000", "count": 1},
        {"category_name": "Food", "total_amount": "750", "count": 2},
    ]


def test_inverted_range_is_rejected(client) -> None:
    response = client.get(
        "/api/reports/monthly",
        params={"start_date": "2024-05-01T00:00:00", "end_date": "2024-04-01T00:00:00"},
        headers=HEADERS,
    )

    assert response.status_code == 422


def test_monthly_endpoint(client) -> None:
    response = client.get("/api/reports/monthly", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == [
        {"month": "Mar 2024", "total_income": "2000", "total_expenses": "1750"},
        {"month": "Apr 2024", "total_income": "2000", "total_expenses": "0"},
    ]


def test_recent_endpoint_respects_limit(client) -> None:
    response = client.get("/api/reports/recent", params={"limit": 2}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert [(item["id"], item["type"]) for item in body] == [(5, "income"), (2, "expense")]
    assert body[1]["category_name"] == "Food"


def test_summary_endpoint(client) -> None:
    response = client.get("/api/reports/summary", headers=HEADERS)

    assert response.json() == {"total_income": "4000", "total_expenses": "1750", "net_balance": "2250"}


def test_data_source_failure_maps_to_service_unavailable(client) -> None:
    app.dependency_overrides[get_transaction_source] = lambda: FailingTransactionSource()

    response = client.get("/api/reports/summary", headers=HEADERS)

    assert response.status_code == 503


def test_categories_endpoint_is_owner_scoped(client) -> None:
    response = client.get("/api/categories", params={"type": "expense"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "name": "Food", "type": "expense"},
        {"id": 2, "name": "Rent", "type": "expense"},
    ]


def test_read_budget_endpoint(client) -> None:
    response = client.get("/api/budgets/2", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "id": 2,
        "category": {"id": 2, "name": "Rent"},
        "amount": "500",
        "month": 3,
        "year": 2024,
    }


def test_create_budget_endpoint(client) -> None:
    response = client.post(
        "/api/budgets",
        json={"category_id": 2, "amount": "800", "month": 4, "year": 2024},
        headers=HEADERS,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["category"] == {"id": 2, "name": "Rent"}
    assert body["amount"] == "800"
    assert (body["month"], body["year"]) == (4, 2024)

    status_response = client.get(f"/api/budgets/{body['id']}/status", headers=HEADERS)
    assert status_response.json()["expense_count"] == 0


def test_create_duplicate_budget_conflicts(client) -> None:
    response = client.post(
        "/api/budgets",
        json={"category_id": 1, "amount": "50", "month": 3, "year": 2024},
        headers=HEADERS,
    )

    assert response.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        {"category_id": 1, "amount": "-1", "month": 5, "year": 2024},
        {"category_id": 1, "amount": "10", "month": 0, "year": 2024},
        {"category_id": 1, "amount": "10", "month": 13, "year": 2024},
    ],
)
def test_create_budget_validates_payload(client, payload) -> None:
    response = client.post("/api/budgets", json=payload, headers=HEADERS)

    assert response.status_code == 422


@pytest.mark.parametrize("category_id", [3, 5, 999])
def test_create_budget_requires_own_expense_category(client, category_id) -> None:
    response = client.post(
        "/api/budgets",
        json={"category_id": category_id, "amount": "10", "month": 5, "year": 2024},
        headers=HEADERS,
    )

    assert response.status_code == 404


def test_create_budget_accepts_zero_amount(client) -> None:
    response = client.post(
        "/api/budgets",
        json={"category_id": 1, "amount": "0", "month": 6, "year": 2024},
        headers=HEADERS,
    )

    assert response.status_code == 201


def test_update_budget_endpoint(client) -> None:
    response = client.patch("/api/budgets/1", json={"amount": "1500"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["amount"] == "1500"
    status_body = client.get("/api/budgets/1/status", headers=HEADERS).json()
    assert status_body["percentage_used"] == "50.00"


def test_update_budget_into_taken_period_conflicts(client) -> None:
    client.post(
        "/api/budgets",
        json={"category_id": 1, "amount": "10", "month": 4, "year": 2024},
        headers=HEADERS,
    )

    response = client.patch("/api/budgets/1", json={"month": 4}, headers=HEADERS)

    assert response.status_code == 409


def test_update_budget_requires_a_field(client) -> None:
    response = client.patch("/api/budgets/1", json={}, headers=HEADERS)

    assert response.status_code == 422


def test_update_budget_of_other_owner_is_not_found(client) -> None:
    response = client.patch("/api/budgets/3", json={"amount": "1"}, headers=HEADERS)

    assert response.status_code == 404


def test_delete_budget_endpoint(client) -> None:
    response = client.delete("/api/budgets/2", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert client.get("/api/budgets/2", headers=HEADERS).status_code == 404


def test_delete_budget_of_other_owner_is_not_found(client) -> None:
    response = client.delete("/api/budgets/3", headers=HEADERS)

    assert response.status_code == 404
    assert client.get("/api/budgets/3", headers={"X-Owner-Id": "2"}).status_code == 200
