"""
Integration tests for transactions, budgets, savings goals and the
finance summary
"""

from decimal import Decimal

import pytest

from app.core.config import settings

API = settings.api_v1_prefix

AS_OF = "2026-10-15"


@pytest.fixture
def finance_category(make_category):
    return make_category("Money", "finance", "wallet")


@pytest.fixture
def add_transaction(client, finance_category):
    def _add(amount: str, type: str = "expense", category_name: str = "Food",
             transaction_date: str = AS_OF, description: str = "Entry"):
        response = client.post(f"{API}/transactions/", json={
            "category_id": finance_category["id"],
            "type": type,
            "amount": amount,
            "description": description,
            "category_name": category_name,
            "transaction_date": transaction_date,
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _add


@pytest.mark.integration
class TestTransactionEndpoints:

    def test_create_transaction(self, add_transaction, mock_redis):
        data = add_transaction("12.50", description="Lunch")
        assert Decimal(data["amount"]) == Decimal("12.50")
        assert data["type"] == "expense"
        assert "transactions" in mock_redis.published

    def test_amount_must_be_positive(self, client, finance_category):
        response = client.post(f"{API}/transactions/", json={
            "category_id": finance_category["id"],
            "amount": "-5",
            "description": "Refund",
            "transaction_date": AS_OF,
        })
        assert response.status_code == 422

    def test_requires_finance_category(self, client, make_category):
        gym = make_category("Gym", "fitness")
        response = client.post(f"{API}/transactions/", json={
            "category_id": gym["id"],
            "amount": "5",
            "description": "Protein",
            "transaction_date": AS_OF,
        })
        assert response.status_code == 400

    def test_list_newest_first_and_filter(self, client, add_transaction):
        add_transaction("10", transaction_date="2026-10-01", description="Old")
        add_transaction("2000", type="income", transaction_date="2026-10-05", description="Salary")

        descriptions = [t["description"] for t in client.get(f"{API}/transactions/").json()]
        assert descriptions == ["Salary", "Old"]

        income = client.get(f"{API}/transactions/", params={"type": "income"}).json()
        assert [t["description"] for t in income] == ["Salary"]

    def test_update_and_delete(self, client, add_transaction):
        transaction = add_transaction("10")
        response = client.put(f"{API}/transactions/{transaction['id']}", json={"amount": "15"})
        assert Decimal(response.json()["amount"]) == Decimal("15")

        assert client.delete(f"{API}/transactions/{transaction['id']}").status_code == 204
        assert client.get(f"{API}/transactions/{transaction['id']}").status_code == 404


@pytest.mark.integration
class TestBudgetEndpoints:

    def test_create_and_filter_budgets(self, client, finance_category):
        for month in (9, 10):
            response = client.post(f"{API}/budgets/", json={
                "category_id": finance_category["id"],
                "budget_category": "Food",
                "amount": "200",
                "month": month,
                "year": 2026,
            })
            assert response.status_code == 201

        october = client.get(f"{API}/budgets/", params={"month": 10, "year": 2026}).json()
        assert len(october) == 1
        assert october[0]["month"] == 10

    def test_month_out_of_range(self, client, finance_category):
        response = client.post(f"{API}/budgets/", json={
            "category_id": finance_category["id"],
            "budget_category": "Food",
            "amount": "200",
            "month": 13,
            "year": 2026,
        })
        assert response.status_code == 422


@pytest.mark.integration
class TestSavingsGoalEndpoints:

    def test_create_and_update_goal(self, client, finance_category, mock_redis):
        response = client.post(f"{API}/savings-goals/", json={
            "category_id": finance_category["id"],
            "name": "Bike",
            "target_amount": "1000",
            "color": "#22c55e",
        })
        assert response.status_code == 201
        goal = response.json()
        assert Decimal(goal["current_amount"]) == 0

        updated = client.put(f"{API}/savings-goals/{goal['id']}", json={"current_amount": "250"}).json()
        assert Decimal(updated["current_amount"]) == Decimal("250")
        assert mock_redis.published.count("savings_goals") == 2

    def test_invalid_color(self, client, finance_category):
        response = client.post(f"{API}/savings-goals/", json={
            "category_id": finance_category["id"],
            "name": "Bike",
            "target_amount": "1000",
            "color": "green",
        })
        assert response.status_code == 422


@pytest.mark.integration
class TestFinanceSummary:

    def test_empty_summary(self, client, finance_category):
        data = client.get(
            f"{API}/finance/summary",
            params={"category_id": finance_category["id"], "as_of": AS_OF},
        ).json()
        assert Decimal(data["stats"]["total_expenses"]) == 0
        assert data["stats"]["expense_change"] == 0.0
        assert data["breakdown"] == []
        assert len(data["monthly"]) == 6
        assert data["budgets"] == []

    def test_summary(self, client, finance_category, add_transaction):
        add_transaction("3000", type="income", category_name="Salary")
        add_transaction("50", category_name="Food")
        add_transaction("100", category_name="Rent")
        add_transaction("100", category_name="Food", transaction_date="2026-09-20")
        client.post(f"{API}/budgets/", json={
            "category_id": finance_category["id"],
            "budget_category": "Food",
            "amount": "200",
            "month": 10,
            "year": 2026,
        })
        client.post(f"{API}/savings-goals/", json={
            "category_id": finance_category["id"],
            "name": "Bike",
            "target_amount": "1000",
            "current_amount": "250",
        })

        data = client.get(
            f"{API}/finance/summary",
            params={"category_id": finance_category["id"], "as_of": AS_OF},
        ).json()

        stats = data["stats"]
        assert Decimal(stats["total_income"]) == Decimal("3000")
        assert Decimal(stats["total_expenses"]) == Decimal("150")
        assert Decimal(stats["net_savings"]) == Decimal("2850")
        assert Decimal(stats["last_month_expenses"]) == Decimal("100")
        assert stats["expense_change"] == pytest.approx(50.0)
        assert stats["transaction_count"] == 3

        assert [s["name"] for s in data["breakdown"]] == ["Rent", "Food"]

        october = data["monthly"][-1]
        assert october["month"] == "Oct"
        assert Decimal(october["savings"]) == Decimal("2850")

        budget = data["budgets"][0]
        assert Decimal(budget["spent"]) == Decimal("50")
        assert Decimal(budget["remaining"]) == Decimal("150")
        assert budget["percentage"] == pytest.approx(25.0)
        assert budget["over"] is False

        assert data["savings"]["goals"][0]["percentage"] == pytest.approx(25.0)

    def test_summary_requires_finance_category(self, client, make_category):
        todos = make_category("Chores", "todos")
        response = client.get(f"{API}/finance/summary", params={"category_id": todos["id"]})
        assert response.status_code == 400

    def test_form_options(self, client):
        data = client.get(f"{API}/finance/options").json()
        assert "Food & Dining" in data["expense_categories"]
        assert data["payment_methods"][0] == "Cash"
