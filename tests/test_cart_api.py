from decimal import Decimal

from conftest import GUEST, USER


def _add(client, store, product, quantity=1, headers=USER, variant_id=None):
    return client.post(
        "/cart",
        json={"store_id": store.id, "product_id": product.id, "variant_id": variant_id, "quantity": quantity},
        headers=headers,
    )


def test_get_cart_creates_empty_cart(client, store):
    response = client.get("/cart", params={"store_id": store.id}, headers=GUEST)

    assert response.status_code == 200
    cart = response.json()["data"]["cart"]
    assert cart["items"] == []
    assert cart["subtotal"] == "0.00"
    assert cart["item_count"] == 0


def test_add_then_increase(client, store, make_product):
    product = make_product(price=Decimal("19.99"))

    first = _add(client, store, product, 1)
    second = _add(client, store, product, 2)

    assert first.status_code == 201
    assert first.json()["message"] == "Item added to cart"
    assert second.status_code == 200
    assert second.json()["message"] == "Cart updated"
    assert second.json()["data"]["item"]["quantity"] == 3
    assert second.json()["data"]["item"]["price"] == "19.99"


def test_cart_view(client, store, make_product):
    _add(client, store, make_product(name="Widget", price=Decimal("10.00")), 3)
    _add(client, store, make_product(name="Gadget", price=Decimal("25.00")), 1)

    cart = client.get("/cart", params={"store_id": store.id}, headers=USER).json()["data"]["cart"]

    assert cart["subtotal"] == "55.00"
    assert cart["item_count"] == 2
    assert cart["total_items"] == 4
    assert cart["items"][0]["product"]["name"] == "Widget"
    assert cart["items"][0]["total"] == "30.00"


def test_add_over_stock(client, store, make_product):
    product = make_product(inventory_quantity=2)

    response = _add(client, store, product, 3)

    assert response.status_code == 400
    assert response.json()["error"]["details"]["available"] == 2


def test_add_unavailable_product(client, store, make_product):
    response = _add(client, store, make_product(status="draft"), 1)
    assert response.status_code == 400

    response = client.post("/cart", json={"store_id": store.id, "product_id": 999}, headers=USER)
    assert response.status_code == 404


def test_add_zero_quantity(client, store, make_product):
    response = _add(client, store, make_product(), 0)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Quantity must be at least 1"


def test_update_quantity(client, store, make_product):
    item_id = _add(client, store, make_product(), 1).json()["data"]["item"]["id"]

    response = client.put(f"/cart/{item_id}", json={"quantity": 4}, headers=USER)

    assert response.status_code == 200
    assert response.json()["data"]["item"]["quantity"] == 4


def test_update_quantity_below_one(client, store, make_product):
    item_id = _add(client, store, make_product(), 1).json()["data"]["item"]["id"]
    response = client.put(f"/cart/{item_id}", json={"quantity": 0}, headers=USER)
    assert response.status_code == 400


def test_other_session_cannot_touch_item(client, store, make_product):
    item_id = _add(client, store, make_product(), 1, headers=GUEST).json()["data"]["item"]["id"]

    response = client.delete(f"/cart/{item_id}", headers={"X-Session-Id": "intruder"})

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_remove_missing_item(client):
    response = client.delete("/cart/12345", headers=USER)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Cart item not found"


def test_remove_and_clear(client, store, make_product):
    item_id = _add(client, store, make_product(name="A"), 1).json()["data"]["item"]["id"]
    _add(client, store, make_product(name="B"), 1)

    assert client.delete(f"/cart/{item_id}", headers=USER).json()["message"] == "Item removed from cart"

    response = client.delete("/cart", params={"store_id": store.id}, headers=USER)
    assert response.status_code == 200
    assert response.json()["message"] == "Cart cleared"

    cart = client.get("/cart", params={"store_id": store.id}, headers=USER).json()["data"]["cart"]
    assert cart["items"] == []


def test_store_id_required(client):
    response = client.get("/cart", headers=USER)
    assert response.status_code == 400
