from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import (
    AccessDenied,
    CartItemNotFound,
    CartNotFound,
    InsufficientStock,
    InvalidQuantity,
    PersistenceError,
    ProductNotFound,
    ProductUnavailable,
)
from storefront.domain.identity import Identity
from storefront.repos.cart_repo import CartRepo
from storefront.services.catalog import CatalogReader
from storefront.utils.money import to_money
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _first_image(product) -> str | None:
    images = product.images or []
    return images[0] if images else None


class CartService:
    """
    Koszyk per (sklep, user) albo (sklep, sesja goscia).
    commands (add, set quantity, remove, clear) modyfikuja stan
    query (get, list) tylko odczyt
    """

    def __init__(self, db: Session, catalog: CatalogReader | None = None):
        self.repo = CartRepo(db)
        self.catalog = catalog or CatalogReader(db)

    #query - odczyt
    def find_cart(self, store_id: int, identity: Identity) -> CartModel | None:
        identity.require_single()
        return self.repo.get_cart_by_owner(store_id, identity.user_id, identity.session_id)

    def list_items(self, cart_id: int) -> list[CartItemModel]:
        return self.repo.get_cart_items(cart_id)

    def get_cart_view(self, store_id: int, identity: Identity) -> Dict[str, Any]:
        cart = self.get_or_create_cart(store_id, identity.user_id, identity.session_id)
        items = self.list_items(cart.id)

        lines = []
        subtotal = Decimal("0.00")
        for i in items:
            line_total = to_money(i.price * i.quantity)
            subtotal += line_total
            lines.append(
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "variant_id": i.variant_id,
                    "quantity": i.quantity,
                    "price": i.price,
                    "total": line_total,
                    "product": {
                        "id": i.product.id,
                        "name": i.product.name,
                        "image": _first_image(i.product),
                        "price": i.product.price,
                        "status": i.product.status,
                    },
                }
            )

        #dict przeksztalcany w jsona
        return {
            "id": cart.id,
            "store_id": cart.store_id,
            "items": lines,
            "subtotal": to_money(subtotal),
            "item_count": len(lines),
            "total_items": sum(i.quantity for i in items),
        }

    #commands
    def get_or_create_cart(
        self,
        store_id: int,
        user_id: str | None,
        session_id: str | None,
    ) -> CartModel:
        Identity(user_id=user_id, session_id=session_id).require_single()

        existing = self.repo.get_cart_by_owner(store_id, user_id, session_id)
        if existing:
            return existing

        try:
            created = self.repo.create_cart(
                CartModel(store_id=store_id, user_id=user_id, session_id=session_id)
            )
        except IntegrityError:
            #rownolegle zapytanie zalozylo koszyk pierwsze, unique constraint nie wpuscil drugiego
            self.repo.rollback()
            logger.info(f"Cart for store {store_id} created concurrently, re-reading")
            existing = self.repo.get_cart_by_owner(store_id, user_id, session_id)
            if not existing:
                raise PersistenceError("Failed to get cart")
            return existing

        logger.info(f"Utworzono nowy koszyk {created.id} w sklepie {store_id}")
        return created

    def upsert_item(
        self,
        store_id: int,
        identity: Identity,
        product_id: int,
        variant_id: str | None = None,
        quantity: int = 1,
    ) -> tuple[CartItemModel, bool]:
        """
        Zwraca (item, created). Istniejaca para (produkt, wariant) dostaje += quantity,
        cena zostaje ta z chwili pierwszego dodania.
        """
        if quantity < 1:
            raise InvalidQuantity()

        product = self.catalog.get_product(product_id)
        if product.store_id != store_id:
            raise ProductNotFound()
        if product.status != "active":
            raise ProductUnavailable(product.id, product.name)

        cart = self.get_or_create_cart(store_id, identity.user_id, identity.session_id)
        existing_item = self.repo.get_cart_item(cart.id, product_id, variant_id)
        if existing_item:
            return self._increment(existing_item, product, quantity), False

        self._check_stock(product, quantity + self.repo.product_quantity_in_cart(cart.id, product_id))

        logger.info(f"Dodaje nowy produkt {product_id} do koszyka {cart.id}")
        try:
            item = self.repo.save_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product_id,
                    variant_id=variant_id or None,
                    quantity=quantity,
                    price=product.price,
                )
            )
        except IntegrityError:
            #rownolegle dodanie tej samej pary (produkt, wariant) wygralo, dokladamy do jego pozycji
            self.repo.rollback()
            logger.info(f"Produkt {product_id} dodany rownolegle do koszyka {cart.id}, re-reading")
            existing_item = self.repo.get_cart_item(cart.id, product_id, variant_id)
            if not existing_item:
                raise PersistenceError("Failed to add item to cart")
            return self._increment(existing_item, product, quantity), False

        return item, True

    def _increment(self, item: CartItemModel, product, quantity: int) -> CartItemModel:
        new_quantity = item.quantity + quantity
        others = self.repo.product_quantity_in_cart(item.cart_id, item.product_id, exclude_item_id=item.id)
        self._check_stock(product, new_quantity + others)

        logger.info(
            f"Produkt {item.product_id} juz jest w koszyku {item.cart_id}, zwiekszam ilosc "
            f"z {item.quantity} do {new_quantity}"
        )
        item.quantity = new_quantity
        return self.repo.save_cart_item(item)

    def set_item_quantity(self, item_id: int, identity: Identity, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise InvalidQuantity()

        item = self._owned_item(item_id, identity)
        others = self.repo.product_quantity_in_cart(item.cart_id, item.product_id, exclude_item_id=item.id)
        self._check_stock(item.product, quantity + others)

        item.quantity = quantity
        return self.repo.save_cart_item(item)

    def remove_item(self, item_id: int, identity: Identity) -> None:
        item = self._owned_item(item_id, identity)
        self.repo.delete_cart_item(item.id)
        logger.info(f"Produkt {item.product_id} usuniety z koszyka {item.cart_id}")

    def clear(self, store_id: int, identity: Identity) -> int:
        cart = self.find_cart(store_id, identity)
        if not cart:
            raise CartNotFound()
        removed = self.repo.clear_cart(cart.id)
        logger.info(f"Koszyk {cart.id} wyczyszczony, usunieto {removed} pozycji")
        return removed

    def _owned_item(self, item_id: int, identity: Identity) -> CartItemModel:
        identity.require_single()
        item = self.repo.get_cart_item_by_id(item_id)
        if not item:
            raise CartItemNotFound()
        if not identity.owns(item.cart.user_id, item.cart.session_id):
            raise AccessDenied("You do not have permission to modify this cart item")
        return item

    @staticmethod
    def _check_stock(product, quantity: int) -> None:
        if product.track_inventory and product.inventory_quantity < quantity:
            raise InsufficientStock(
                product.id,
                product.name,
                available=product.inventory_quantity,
                requested=quantity,
            )
