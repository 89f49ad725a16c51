# storefront/services/order_builder.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Protocol

from storefront.domain.errors import InsufficientStock, ProductUnavailable
from storefront.utils.money import to_money


class Catalog(Protocol):
    def get_products_by_ids(self, product_ids) -> dict[int, Any]: ...


@dataclass(frozen=True)
class OrderItemDraft:
    product_id: int
    variant_id: str | None
    product_name: str
    product_image: str | None
    quantity: int
    price: Decimal
    total: Decimal


@dataclass(frozen=True)
class OrderDraft:
    items: list[OrderItemDraft]
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    discount: Decimal
    total: Decimal
    #stan produktow z chwili walidacji, potrzebny przy zdejmowaniu z magazynu
    products: dict[int, Any] = field(default_factory=dict, repr=False)


def _first_image(product) -> str | None:
    images = product.images or []
    return images[0] if images else None


class OrderBuilder:
    """
    Koszyk -> niezapisane zamowienie.
    Jedyne I/O to odczyt katalogu, nic nie zapisuje.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def build(
        self,
        cart_items: Iterable[Any],
        tax=Decimal("0"),
        shipping_cost=Decimal("0"),
        discount=Decimal("0"),
    ) -> OrderDraft:
        cart_items = list(cart_items)
        products = self.catalog.get_products_by_ids(i.product_id for i in cart_items)

        #warianty tego samego produktu dziela jeden stan magazynu
        requested: dict[int, int] = {}
        for item in cart_items:
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        items: list[OrderItemDraft] = []
        subtotal = Decimal("0.00")

        for item in cart_items:
            product = products.get(item.product_id)

            if product is None or product.status != "active":
                name = product.name if product is not None else f"#{item.product_id}"
                raise ProductUnavailable(item.product_id, name)

            wanted = requested[item.product_id]
            if product.track_inventory and product.inventory_quantity < wanted:
                raise InsufficientStock(
                    product.id,
                    product.name,
                    available=product.inventory_quantity,
                    requested=wanted,
                )

            #cena przypieta w koszyku, nie aktualna cena produktu
            price = to_money(item.price)
            line_total = to_money(price * item.quantity)
            subtotal += line_total

            items.append(
                OrderItemDraft(
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=product.name,
                    product_image=_first_image(product),
                    quantity=item.quantity,
                    price=price,
                    total=line_total,
                )
            )

        subtotal = to_money(subtotal)
        tax = to_money(tax)
        shipping_cost = to_money(shipping_cost)
        discount = to_money(discount)

        return OrderDraft(
            items=items,
            subtotal=subtotal,
            tax=tax,
            shipping_cost=shipping_cost,
            discount=discount,
            total=to_money(subtotal + tax + shipping_cost - discount),
            products=products,
        )
