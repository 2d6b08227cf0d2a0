"""
Tests for account and category endpoints.

These test the HTTP layer: status codes, response format,
and the error envelope. Business logic is tested under
tests/services/.
"""

import uuid


def create_account(client, name="Main", balance="100.00", account_type="spending"):
    response = client.post("/accounts", json={
        "name": name,
        "account_type": account_type,
        "balance": balance,
    })
    assert response.status_code == 201
    return response.json()


class TestAccountEndpoints:

    def test_create_account_returns_201(self, client):
        data = create_account(client)
        assert data["name"] == "Main"
        assert data["account_type"] == "spending"
        assert data["is_active"] is True

    def test_negative_balance_returns_422(self, client):
        response = client.post("/accounts", json={
            "name": "Bad", "account_type": "wallet", "balance": "-5",
        })
        assert response.status_code == 422

    def test_unknown_account_type_returns_422(self, client):
        response = client.post("/accounts", json={
            "name": "Bad", "account_type": "checking",
        })
        assert response.status_code == 422

    def test_invalid_owner_header_returns_422(self, client):
        response = client.get("/accounts", headers={"X-Owner-Id": "not-a-uuid"})
        assert response.status_code == 422

    def test_get_missing_account_returns_404_envelope(self, client):
        response = client.get("/accounts/999")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert "999" in error["message"]

    def test_other_owner_sees_404(self, client):
        account = create_account(client)
        response = client.get(
            f"/accounts/{account['id']}",
            headers={"X-Owner-Id": str(uuid.uuid4())},
        )
        assert response.status_code == 404

    def test_balance_endpoint(self, client):
        account = create_account(client, balance="42.50")
        response = client.get(f"/accounts/{account['id']}/balance")
        assert response.status_code == 200
        assert float(response.json()["balance"]) == 42.5

    def test_summary_and_reconcile(self, client):
        account = create_account(client, balance="10")
        create_account(client, name="Savings", balance="90", account_type="saving")

        summary = client.get("/accounts/summary").json()
        assert float(summary["total_balance"]) == 100

        report = client.get(f"/accounts/{account['id']}/reconcile").json()
        assert report["is_consistent"] is True

    def test_deactivate_account(self, client):
        account = create_account(client)
        response = client.delete(f"/accounts/{account['id']}")
        assert response.status_code == 200
        assert response.json()["is_active"] is False


class TestCategoryEndpoints:

    def test_create_and_list_expense_types(self, client):
        response = client.post("/expense-types", json={
            "name": "Food", "budget_amount": "300",
        })
        assert response.status_code == 201

        listed = client.get("/expense-types").json()
        assert [c["name"] for c in listed] == ["Food"]

    def test_duplicate_income_type_returns_400(self, client):
        client.post("/income-types", json={"name": "Salary"})
        response = client.post("/income-types", json={"name": "Salary"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_delete_unused_category_returns_204(self, client):
        created = client.post("/income-types", json={"name": "Gift"}).json()
        response = client.delete(f"/income-types/{created['id']}")
        assert response.status_code == 204
