"""
Cart and checkout API integration tests
"""

from decimal import Decimal

API = "/api/v1"


def add(client, headers, item, times=1):
    for _ in range(times):
        response = client.post(f"{API}/cart/items", headers=headers, json={"menu_item_id": item.id})
        assert response.status_code == 200, response.text
    return response.json()


class TestCartAPI:
    """Session cart over HTTP"""

    def test_add_and_view(self, client, customer_headers, menu_items):
        add(client, customer_headers, menu_items["macchiato"], times=2)
        cart = add(client, customer_headers, menu_items["latte"])

        assert Decimal(cart["total"]) == Decimal("15.25")
        assert cart["item_count"] == 3
        assert [line["quantity"] for line in cart["lines"]] == [2, 1]

        viewed = client.get(f"{API}/cart", headers=customer_headers).json()
        assert viewed == cart

    def test_inactive_item_rejected(self, client, customer_headers, menu_items):
        response = client.post(f"{API}/cart/items", headers=customer_headers,
                               json={"menu_item_id": menu_items["croissant"].id})
        assert response.status_code == 400
        assert response.json()["error_code"] == "MENU_ITEM_INACTIVE"

    def test_unknown_item_rejected(self, client, customer_headers):
        response = client.post(f"{API}/cart/items", headers=customer_headers,
                               json={"menu_item_id": 404})
        assert response.status_code == 404

    def test_set_quantity_and_remove(self, client, customer_headers, menu_items):
        latte = menu_items["latte"]
        add(client, customer_headers, latte)

        cart = client.put(f"{API}/cart/items/{latte.id}", headers=customer_headers,
                          json={"quantity": 4}).json()
        assert Decimal(cart["total"]) == Decimal("17.00")

        cart = client.put(f"{API}/cart/items/{latte.id}", headers=customer_headers,
                          json={"quantity": 0}).json()
        assert cart["lines"] == []

    def test_remove_unknown_line_is_noop(self, client, customer_headers, menu_items):
        add(client, customer_headers, menu_items["latte"])
        response = client.delete(f"{API}/cart/items/999", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["item_count"] == 1

    def test_clear(self, client, customer_headers, menu_items):
        add(client, customer_headers, menu_items["latte"], times=3)
        cart = client.delete(f"{API}/cart", headers=customer_headers).json()
        assert cart["item_count"] == 0
        assert Decimal(cart["total"]) == Decimal("0")

    def test_price_change_does_not_touch_cart(self, client, admin_headers, customer_headers, menu_items):
        latte = menu_items["latte"]
        add(client, customer_headers, latte)
        client.put(f"{API}/menu/{latte.id}", headers=admin_headers, json={"price": "9.99"})
        cart = add(client, customer_headers, latte)

        assert Decimal(cart["lines"][0]["unit_price"]) == Decimal("4.25")
        assert Decimal(cart["total"]) == Decimal("8.50")


class TestCheckoutAPI:
    """Checkout and history endpoints"""

    def test_checkout(self, client, customer_headers, staff_headers, menu_items):
        add(client, customer_headers, menu_items["macchiato"], times=2)
        add(client, customer_headers, menu_items["latte"])

        response = client.post(f"{API}/orders/checkout", headers=customer_headers,
                               json={"payment_method": "cash"})
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_amount"]) == Decimal("15.25")
        assert data["payment_method"] == "cash"
        assert data["status"] == "completed"
        assert data["message"] == "Order placed successfully! Total: ₱15.25"

        assert client.get(f"{API}/cart", headers=customer_headers).json()["item_count"] == 0

        order = client.get(f"{API}/orders/{data['transaction_id']}", headers=staff_headers).json()
        assert len(order["items"]) == 2
        assert sum(Decimal(line["subtotal"]) for line in order["items"]) == Decimal("15.25")

        daily = client.get(f"{API}/statistics/daily", headers=staff_headers).json()
        assert Decimal(daily["total_revenue"]) == Decimal("15.25")
        assert daily["total_orders"] == 1

    def test_checkout_empty_cart(self, client, customer_headers):
        for _ in range(2):
            response = client.post(f"{API}/orders/checkout", headers=customer_headers, json={})
            assert response.status_code == 400
            assert response.json()["error_code"] == "CART_EMPTY"

    def test_checkout_bad_payment_method(self, client, customer_headers, menu_items):
        add(client, customer_headers, menu_items["latte"])
        response = client.post(f"{API}/orders/checkout", headers=customer_headers,
                               json={"payment_method": "barter"})
        assert response.status_code == 400
        assert client.get(f"{API}/cart", headers=customer_headers).json()["item_count"] == 1

    def test_checkout_replay_with_client_token(self, client, customer_headers, admin_headers, menu_items):
        add(client, customer_headers, menu_items["latte"])
        body = {"payment_method": "e-wallet", "client_token": "order-7f3a9c2e"}

        first = client.post(f"{API}/orders/checkout", headers=customer_headers, json=body).json()
        second = client.post(f"{API}/orders/checkout", headers=customer_headers, json=body).json()

        assert first["replayed"] is False
        assert second["replayed"] is True
        assert second["transaction_id"] == first["transaction_id"]
        assert client.get(f"{API}/orders", headers=admin_headers).json()["total"] == 1

    def test_history_permissions(self, client, customer_headers, staff_headers, admin_headers):
        assert client.get(f"{API}/orders", headers=customer_headers).status_code == 403
        assert client.get(f"{API}/orders", headers=staff_headers).status_code == 200
        assert client.get(f"{API}/orders/recent", headers=admin_headers).status_code == 200
        assert client.delete(f"{API}/orders", headers=staff_headers).status_code == 403

    def test_my_orders(self, client, customer_headers, staff_headers, menu_items):
        for headers in (customer_headers, staff_headers):
            add(client, headers, menu_items["latte"])
            client.post(f"{API}/orders/checkout", headers=headers, json={})

        mine = client.get(f"{API}/orders/mine", headers=customer_headers).json()
        assert mine["total"] == 1
        assert len(mine["items"]) == 1

    def test_delete_and_clear(self, client, customer_headers, admin_headers, menu_items):
        ids = []
        for _ in range(2):
            add(client, customer_headers, menu_items["latte"])
            ids.append(client.post(f"{API}/orders/checkout", headers=customer_headers,
                                   json={}).json()["transaction_id"])

        assert client.delete(f"{API}/orders/{ids[0]}", headers=admin_headers).status_code == 200
        assert client.get(f"{API}/orders/{ids[0]}", headers=admin_headers).status_code == 404

        cleared = client.delete(f"{API}/orders", headers=admin_headers).json()
        assert cleared["data"]["deleted"] == 1
        assert client.get(f"{API}/orders", headers=admin_headers).json()["total"] == 0

    def test_dashboard(self, client, admin_headers, staff_headers, customer_headers, menu_items):
        add(client, customer_headers, menu_items["macchiato"])
        client.post(f"{API}/orders/checkout", headers=customer_headers, json={})

        assert client.get(f"{API}/statistics/dashboard", headers=staff_headers).status_code == 403

        data = client.get(f"{API}/statistics/dashboard", headers=admin_headers).json()
        assert Decimal(data["total_revenue"]) == Decimal("5.50")
        assert data["total_orders"] == 1
        assert data["staff_count"] == 1
        assert data["menu_item_count"] == 3
        assert len(data["recent_orders"]) == 1
