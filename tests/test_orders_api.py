from decimal import Decimal

import pytest

from conftest import ADDRESS, GUEST, OWNER, USER


@pytest.fixture()
def order(client, store, make_product, add_to_cart):
    add_to_cart(make_product(price=Decimal("10.00")), 2)
    response = client.post(
        "/orders",
        json={"store_id": store.id, "shipping_address": ADDRESS},
        headers=USER,
    )
    assert response.status_code == 201
    return response.json()["data"]["order"]


def test_my_orders(client, order):
    response = client.get("/orders/my", headers=USER)

    assert response.status_code == 200
    orders = response.json()["data"]["orders"]
    assert [o["order_number"] for o in orders] == [order["order_number"]]
    assert orders[0]["order_items"][0]["quantity"] == 2


def test_my_orders_requires_login(client, order):
    response = client.get("/orders/my", headers=GUEST)
    assert response.status_code == 401


def test_get_order_by_owner_and_store_owner(client, order):
    for headers in (USER, OWNER):
        response = client.get(f"/orders/{order['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["order"]["total"] == "20.00"


def test_get_order_other_user(client, order):
    response = client.get(f"/orders/{order['id']}", headers={"X-User-Id": "someone-else"})
    assert response.status_code == 403


def test_get_missing_order(client):
    response = client.get("/orders/999", headers=USER)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Order not found"


def test_store_orders(client, store, order):
    response = client.get(f"/orders/store/{store.id}", headers=OWNER)

    assert response.status_code == 200
    assert len(response.json()["data"]["orders"]) == 1

    assert client.get(f"/orders/store/{store.id}", headers=USER).status_code == 403
    assert client.get(f"/orders/store/{store.id}", headers=GUEST).status_code == 401


def test_update_status(client, order):
    response = client.put(
        f"/orders/{order['id']}/status",
        json={"status": "shipped", "payment_status": "paid"},
        headers=OWNER,
    )

    assert response.status_code == 200
    updated = response.json()["data"]["order"]
    assert updated["status"] == "shipped"
    assert updated["payment_status"] == "paid"


def test_update_status_invalid(client, order):
    response = client.put(f"/orders/{order['id']}/status", json={"status": "teleported"}, headers=OWNER)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid order status"

    response = client.put(f"/orders/{order['id']}/status", json={}, headers=OWNER)
    assert response.status_code == 400


def test_update_status_by_customer(client, order):
    response = client.put(f"/orders/{order['id']}/status", json={"status": "cancelled"}, headers=USER)
    assert response.status_code == 403
