# storefront/services/checkout_service.py
import uuid
from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import (
    CartNotFound,
    CheckoutInProgress,
    EmptyCart,
    InventoryUpdateFailed,
    MissingShippingAddress,
    OrderCreationFailed,
    StorefrontError,
)
from storefront.domain.identity import Identity
from storefront.domain.schemas import CheckoutIn
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.catalog import CatalogReader
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_builder import OrderBuilder, OrderDraft
from storefront.services.order_number import OrderNumberGenerator
from storefront.utils.retry import conflict_retry
from storefront.utils.settings import (
    CHECKOUT_LOCK_TTL_SECONDS,
    DEFAULT_CURRENCY,
    ORDER_CREATE_MAX_ATTEMPTS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutStage(str, Enum):
    VALIDATING_CART = "validating_cart"
    BUILDING_ORDER = "building_order"
    PERSISTING_ORDER = "persisting_order"
    DECREMENTING_INVENTORY = "decrementing_inventory"
    CLEARING_CART = "clearing_cart"
    DONE = "done"
    FAILED = "failed"


class _OrderNumberTaken(Exception):
    """Unique constraint na order_number, caly zapis zamowienia idzie jeszcze raz."""


class CheckoutService:
    """
    Koszyk -> zamowienie.

    Etapy 1-3 (walidacja, budowa, zapis) sa "twarde": blad nie zostawia zamowienia.
    Etapy 4-5 (magazyn, czyszczenie koszyka) sa "miekkie": blad jest logowany,
    zamowienie zostaje i checkout konczy sie sukcesem.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notifier: NotificationService,
        order_numbers: OrderNumberGenerator | None = None,
    ):
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.builder = OrderBuilder(CatalogReader(db))
        self.order_numbers = order_numbers or OrderNumberGenerator(self.orders.order_number_exists)
        self.lock_service = lock_service
        self.notifier = notifier
        self.stage: CheckoutStage | None = None

    def _enter(self, stage: CheckoutStage, cart_id: int | None = None):
        self.stage = stage
        logger.info(f"Checkout cart {cart_id}: {stage.value}")

    def checkout(self, payload: CheckoutIn, identity: Identity) -> OrderModel:
        identity.require_single()
        self._enter(CheckoutStage.VALIDATING_CART)

        cart = self.carts.get_cart_by_owner(payload.store_id, identity.user_id, identity.session_id)
        if not cart:
            self.stage = CheckoutStage.FAILED
            raise CartNotFound()

        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(cart.id, token, CHECKOUT_LOCK_TTL_SECONDS):
            self.stage = CheckoutStage.FAILED
            raise CheckoutInProgress()

        try:
            return self._run(cart, payload, identity)
        except StorefrontError as e:
            logger.warning(f"Checkout cart {cart.id} failed at {self.stage.value}: {e.message}")
            self.stage = CheckoutStage.FAILED
            raise
        finally:
            try:
                self.lock_service.release_checkout_lock(cart.id, token)
            except Exception as e:
                #lock i tak wygasnie po TTL
                logger.warning(f"Failed to release checkout lock for cart {cart.id}: {e}")

    def _run(self, cart, payload: CheckoutIn, identity: Identity) -> OrderModel:
        # 1. walidacja koszyka
        cart_items = self.carts.get_cart_items(cart.id)
        if not cart_items:
            raise EmptyCart()

        if not payload.shipping_address:
            raise MissingShippingAddress()

        # 2. budowa zamowienia, nic jeszcze nie zapisane
        self._enter(CheckoutStage.BUILDING_ORDER, cart.id)
        draft = self.builder.build(
            cart_items,
            tax=payload.tax,
            shipping_cost=payload.shipping_cost,
            discount=payload.discount,
        )

        # 3. zapis zamowienia + pozycji
        self._enter(CheckoutStage.PERSISTING_ORDER, cart.id)
        header = {
            "store_id": payload.store_id,
            "user_id": identity.user_id,
            "status": "pending",
            "payment_status": "pending",
            "payment_method": payload.payment_method,
            "subtotal": draft.subtotal,
            "tax": draft.tax,
            "shipping_cost": draft.shipping_cost,
            "discount": draft.discount,
            "total": draft.total,
            "currency": DEFAULT_CURRENCY,
            "shipping_address": payload.shipping_address,
            "billing_address": payload.billing_address or payload.shipping_address,
            "notes": payload.notes,
        }
        try:
            order_id = self._persist_order(header, draft)
        except _OrderNumberTaken as e:
            raise OrderCreationFailed(details=str(e)) from e

        logger.info(f"Order {order_id} created from cart {cart.id}")

        # 4. zdjecie z magazynu (miekkie)
        self._enter(CheckoutStage.DECREMENTING_INVENTORY, cart.id)
        self._decrement_inventory(payload.store_id, draft)

        # 5. czyszczenie koszyka (miekkie), sam koszyk zostaje na kolejne zakupy
        self._enter(CheckoutStage.CLEARING_CART, cart.id)
        try:
            self.carts.clear_cart(cart.id)
        except SQLAlchemyError as e:
            self.carts.rollback()
            logger.error(f"Failed to clear cart {cart.id} after order {order_id}: {e}")

        self._enter(CheckoutStage.DONE, cart.id)
        order = self.orders.get_order(order_id)
        self._notify_order_placed(order)
        return order

    @conflict_retry(_OrderNumberTaken, ORDER_CREATE_MAX_ATTEMPTS)
    def _persist_order(self, header: dict, draft: OrderDraft) -> int:
        order_number = self.order_numbers.generate()

        try:
            order = self.orders.create_order(OrderModel(order_number=order_number, **header))
        except IntegrityError as e:
            self.orders.rollback()
            if self.orders.order_number_exists(order_number):
                logger.warning(f"Order number {order_number} taken at insert time, retrying")
                raise _OrderNumberTaken(order_number) from e
            raise OrderCreationFailed(details=str(e.orig)) from e
        except SQLAlchemyError as e:
            self.orders.rollback()
            raise OrderCreationFailed(details=str(e)) from e

        order_id = order.id
        try:
            self.orders.add_order_items(
                [
                    OrderItemModel(
                        order_id=order_id,
                        product_id=i.product_id,
                        variant_id=i.variant_id,
                        product_name=i.product_name,
                        product_image=i.product_image,
                        quantity=i.quantity,
                        price=i.price,
                        total=i.total,
                    )
                    for i in draft.items
                ]
            )
        except SQLAlchemyError as e:
            self.orders.rollback()
            self._compensate(order_id)
            raise OrderCreationFailed("Failed to create order items", details=str(e)) from e

        return order_id

    def _compensate(self, order_id: int):
        #brak transakcji obejmujacej naglowek i pozycje, wiec usuwamy naglowek recznie
        logger.warning(f"Order items insert failed, deleting order {order_id}")
        try:
            self.orders.delete_order(order_id)
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.error(f"Compensation failed, order {order_id} left without items: {e}")

    def _decrement_inventory(self, store_id: int, draft: OrderDraft):
        for item in draft.items:
            #produkt wygasl po commitach, odczyt atrybutow to juz zapytanie do bazy
            try:
                product = draft.products[item.product_id]
                if not product.track_inventory:
                    continue
                threshold = product.low_stock_threshold
                remaining = self.products.decrement_inventory(item.product_id, item.quantity)
            except InventoryUpdateFailed as e:
                #ktos kupil w miedzyczasie, zamowienie zostaje, stan do uzgodnienia recznie
                logger.warning(f"{e.message}, order kept for manual reconciliation")
                continue
            except SQLAlchemyError as e:
                self.products.rollback()
                logger.error(f"Inventory update for product {item.product_id} failed: {e}")
                continue

            if remaining <= threshold:
                try:
                    self.notifier.send_low_stock_alert(store_id, item.product_id, item.product_name, remaining)
                except Exception as e:
                    logger.warning(f"Low stock alert for product {item.product_id} not sent: {e}")

    def _notify_order_placed(self, order: OrderModel):
        try:
            self.notifier.send_order_notification(order.store_id, order.id, order.order_number, str(order.total))
        except Exception as e:
            logger.warning(f"Order notification for {order.id} not sent: {e}")
