"""
Tests for subscription endpoints.
"""

from decimal import Decimal


def create_account(client):
    return client.post("/accounts", json={
        "name": "Card", "account_type": "spending",
    }).json()


def test_create_and_monthly_cost(client):
    account = create_account(client)
    created = client.post("/subscriptions", json={
        "account_id": account["id"],
        "name": "Video",
        "amount": "36",
        "billing_cycle": "quarterly",
        "next_billing_date": "2024-04-01",
    })

    assert created.status_code == 201
    assert created.json()["billing_cycle"] == "quarterly"

    cost = client.get("/subscriptions/monthly-cost").json()
    assert Decimal(cost["total_monthly_cost"]) == Decimal("12.00")


def test_unknown_cycle_returns_422(client):
    account = create_account(client)
    response = client.post("/subscriptions", json={
        "account_id": account["id"],
        "name": "Video",
        "amount": "10",
        "billing_cycle": "daily",
        "next_billing_date": "2024-04-01",
    })
    assert response.status_code == 422


def test_missing_subscription_returns_404(client):
    response = client.get("/subscriptions/999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
