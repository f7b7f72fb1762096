"""
Payment methods, operation log and health endpoints
"""

from brewpos.core.exceptions import PersistenceError
from brewpos.services.payment_service import BUILTIN_PAYMENT_METHODS, PaymentService

API = "/api/v1"


class TestPaymentMethods:
    """Payment method listing"""

    def test_seeded_methods(self, client, customer_headers):
        response = client.get(f"{API}/payment-methods", headers=customer_headers)

        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["Cash", "E-Wallet"]

    def test_fallback_when_table_empty(self, test_db):
        test_db.execute_query("DELETE FROM payment_methods")
        methods = PaymentService(test_db).list_payment_methods()
        assert [m.name for m in methods] == [m.name for m in BUILTIN_PAYMENT_METHODS]

    def test_fallback_when_unreadable(self, test_db, monkeypatch):
        def broken(*args, **kwargs):
            raise PersistenceError("table missing")

        monkeypatch.setattr(test_db, "fetch_dicts", broken)
        methods = PaymentService(test_db).list_payment_methods()
        assert [m.method.value for m in methods] == ["cash", "e-wallet"]


class TestLogsAPI:
    """Operation log"""

    def test_admin_reads_log(self, client, admin_headers, customer_headers, menu_items):
        client.post(f"{API}/cart/items", headers=customer_headers,
                    json={"menu_item_id": menu_items["latte"].id})
        client.post(f"{API}/orders/checkout", headers=customer_headers, json={})

        response = client.get(f"{API}/logs", params={"action": "order_complete"}, headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["logs"][0]["detail"]["total_amount"] == "4.25"

    def test_log_admin_only(self, client, staff_headers):
        assert client.get(f"{API}/logs", headers=staff_headers).status_code == 403


class TestHealth:
    """Liveness"""

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "BrewPOS API (Test)"
