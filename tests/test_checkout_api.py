"""Checkout przez HTTP: koperta odpowiedzi, kody bledow, serializacja kwot."""

from decimal import Decimal

from sqlalchemy import select

from storefront.data.models import OrderModel

from conftest import ADDRESS, GUEST, USER, USER_ID


def _checkout(client, store, headers=USER, **body):
    body.setdefault("store_id", store.id)
    body.setdefault("shipping_address", ADDRESS)
    return client.post("/orders", json=body, headers=headers)


def test_checkout_returns_created_order(client, store, make_product, add_to_cart):
    add_to_cart(make_product(name="Widget", price=Decimal("10.00")), 3)
    add_to_cart(make_product(name="Gadget", price=Decimal("25.00")), 1)

    response = _checkout(client, store, tax="2.00", shipping_cost="5.00", discount=0)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully"

    order = body["data"]["order"]
    assert order["subtotal"] == "55.00"
    assert order["total"] == "62.00"
    assert order["tax"] == "2.00"
    assert order["shipping_cost"] == "5.00"
    assert order["discount"] == "0.00"
    assert order["user_id"] == USER_ID
    assert order["billing_address"] == ADDRESS
    assert [(i["product_name"], i["quantity"], i["price"], i["total"]) for i in order["order_items"]] == [
        ("Widget", 3, "10.00", "30.00"),
        ("Gadget", 1, "25.00", "25.00"),
    ]


def test_guest_checkout_by_session_header(client, store, make_product, add_to_cart):
    from storefront.domain.identity import Identity

    add_to_cart(make_product(), 2, identity=Identity(session_id=GUEST["X-Session-Id"]))

    response = _checkout(client, store, headers=GUEST)

    assert response.status_code == 201
    assert response.json()["data"]["order"]["user_id"] is None


def test_empty_cart(client, db, store):
    client.get("/cart", params={"store_id": store.id}, headers=USER)

    response = _checkout(client, store)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": {"message": "Cart is empty"}}
    assert db.execute(select(OrderModel)).scalars().all() == []


def test_cart_not_found(client, store):
    response = _checkout(client, store)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Cart not found"


def test_missing_shipping_address(client, store, make_product, add_to_cart):
    add_to_cart(make_product(), 1)

    response = client.post("/orders", json={"store_id": store.id}, headers=USER)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Shipping address is required"


def test_archived_product(client, db, store, make_product, add_to_cart):
    product = make_product(name="Old Widget")
    add_to_cart(product, 1)
    product.status = "archived"
    db.commit()

    response = _checkout(client, store)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == 'Product "Old Widget" is not available'
    assert db.execute(select(OrderModel)).scalars().all() == []


def test_insufficient_stock_details(client, db, store, make_product, add_to_cart):
    product = make_product(inventory_quantity=5)
    add_to_cart(product, 5)
    product.inventory_quantity = 2
    db.commit()

    response = _checkout(client, store)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["details"] == {"product_id": product.id, "available": 2, "requested": 5}


def test_missing_store_id_is_validation_error(client):
    response = client.post("/orders", json={"shipping_address": ADDRESS}, headers=USER)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["message"] == "Validation Error"
    assert body["error"]["details"][0]["field"] == "body.store_id"


def test_negative_amounts_rejected(client, store):
    response = _checkout(client, store, discount="-1")
    assert response.status_code == 400


def test_no_identity(client, store):
    response = _checkout(client, store, headers={})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "User ID or session ID required"


def test_checkout_in_progress(client, store, make_product, add_to_cart, lock_service):
    item = add_to_cart(make_product(), 1)
    lock_service.held[item.cart_id] = "other-request"

    response = _checkout(client, store)

    assert response.status_code == 409
