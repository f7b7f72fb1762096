"""
Menu API integration tests
"""

from decimal import Decimal

API = "/api/v1"


class TestMenuAPI:
    """Menu listing and admin CRUD"""

    def test_active_menu_for_customer(self, client, customer_headers, menu_items):
        response = client.get(f"{API}/menu", headers=customer_headers)

        assert response.status_code == 200
        names = [item["name"] for item in response.json()["items"]]
        assert names == ["Caramel Macchiato", "Iced Latte"]

    def test_menu_requires_sign_in(self, client, menu_items):
        assert client.get(f"{API}/menu").status_code == 401

    def test_all_items_admin_only(self, client, admin_headers, customer_headers, menu_items):
        assert client.get(f"{API}/menu/all", headers=customer_headers).status_code == 403

        response = client.get(f"{API}/menu/all", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 3

    def test_create_update_delete(self, client, admin_headers):
        created = client.post(f"{API}/menu", headers=admin_headers, json={
            "name": "Matcha Latte", "emoji": "🍵", "price": "4.75", "description": "Ceremonial grade"
        })
        assert created.status_code == 201
        item = created.json()
        assert Decimal(item["price"]) == Decimal("4.75")
        assert item["is_active"] is True

        updated = client.put(f"{API}/menu/{item['id']}", headers=admin_headers,
                             json={"price": "5.00", "is_active": False})
        assert updated.status_code == 200
        assert Decimal(updated.json()["price"]) == Decimal("5.00")
        assert updated.json()["is_active"] is False
        assert updated.json()["name"] == "Matcha Latte"

        deleted = client.delete(f"{API}/menu/{item['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert client.get(f"{API}/menu/{item['id']}", headers=admin_headers).status_code == 404

    def test_staff_cannot_create(self, client, staff_headers):
        response = client.post(f"{API}/menu", headers=staff_headers,
                               json={"name": "Mocha", "price": "4.00"})
        assert response.status_code == 403
        assert response.json()["error_code"] == "PERMISSION_DENIED"

    def test_negative_price_rejected(self, client, admin_headers):
        response = client.post(f"{API}/menu", headers=admin_headers,
                               json={"name": "Free Money", "price": "-1"})
        assert response.status_code == 422

    def test_update_missing_item(self, client, admin_headers):
        response = client.put(f"{API}/menu/9999", headers=admin_headers, json={"price": "1.00"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "MENU_ITEM_NOT_FOUND"
