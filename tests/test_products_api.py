from decimal import Decimal

from sqlalchemy import select

from storefront.data.models import CartItemModel, OrderItemModel, ProductModel

from conftest import ADDRESS, OWNER, USER


def test_product_with_orders_is_archived(client, db, store, make_product, add_to_cart):
    product = make_product(name="Widget", price=Decimal("10.00"))
    add_to_cart(product, 1)
    client.post("/orders", json={"store_id": store.id, "shipping_address": ADDRESS}, headers=USER)

    response = client.delete(f"/products/{product.id}", headers=OWNER)

    assert response.status_code == 200
    assert response.json()["data"]["product"]["status"] == "archived"

    db.expire_all()
    assert db.get(ProductModel, product.id).status == "archived"
    item = db.execute(select(OrderItemModel)).scalar_one()
    assert (item.product_id, item.product_name, item.price) == (product.id, "Widget", Decimal("10.00"))


def test_product_without_orders_is_deleted(client, db, make_product, add_to_cart):
    product = make_product()
    add_to_cart(product, 1)

    response = client.delete(f"/products/{product.id}", headers=OWNER)

    assert response.status_code == 200
    assert response.json()["message"] == "Product deleted successfully"
    assert db.execute(select(ProductModel).where(ProductModel.id == product.id)).scalar_one_or_none() is None
    assert db.execute(select(CartItemModel)).scalars().all() == []


def test_only_store_owner_deletes(client, make_product):
    product = make_product()

    assert client.delete(f"/products/{product.id}", headers=USER).status_code == 403
    assert client.delete(f"/products/{product.id}", headers={"X-Session-Id": "s"}).status_code == 401
    assert client.delete("/products/999", headers=OWNER).status_code == 404
