# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import (
    AccessDenied,
    AuthenticationRequired,
    InvalidOrderStatus,
    OrderNotFound,
    StoreNotFound,
)
from storefront.domain.identity import Identity
from storefront.domain.schemas import OrderStatus, PaymentStatus
from storefront.repos.order_repo import OrderRepo
from storefront.repos.store_repo import StoreRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_ORDER_STATUSES = {s.value for s in OrderStatus}
_PAYMENT_STATUSES = {s.value for s in PaymentStatus}


class OrderService:
    """
    Odczyt zamowien i zmiany statusu przez wlasciciela sklepu.
    Samo tworzenie zamowien jest w CheckoutService.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.stores = StoreRepo(db)

    def get_order(self, order_id: int, identity: Identity) -> OrderModel:
        """
        Use Case: Pobranie zamowienia (Query).
        Zalogowany widzi swoje zamowienia albo zamowienia swojego sklepu.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise OrderNotFound()

        if identity.user_id and order.user_id != identity.user_id:
            if not self.stores.is_owner(order.store_id, identity.user_id):
                raise AccessDenied("You do not have permission to view this order")

        return order

    def list_user_orders(self, identity: Identity) -> list[OrderModel]:
        if not identity.is_authenticated:
            raise AuthenticationRequired()
        return self.repo.list_orders_by_user(identity.user_id)

    def list_store_orders(self, store_id: int, identity: Identity, limit: int = 50, offset: int = 0) -> list[OrderModel]:
        if not identity.is_authenticated:
            raise AuthenticationRequired()
        if not self.stores.is_owner(store_id, identity.user_id):
            raise StoreNotFound()
        return self.repo.list_orders_by_store(store_id, limit=limit, offset=offset)

    def update_status(
        self,
        order_id: int,
        identity: Identity,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> OrderModel:
        if not identity.is_authenticated:
            raise AuthenticationRequired()

        order = self.repo.get_order(order_id)
        if not order:
            raise OrderNotFound()

        if not self.stores.is_owner(order.store_id, identity.user_id):
            raise AccessDenied("You do not have permission to update this order")

        patch = {}
        if status is not None:
            if status not in _ORDER_STATUSES:
                raise InvalidOrderStatus(details={"status": status, "allowed": sorted(_ORDER_STATUSES)})
            patch["status"] = status
        if payment_status is not None:
            if payment_status not in _PAYMENT_STATUSES:
                raise InvalidOrderStatus(
                    "Invalid payment status",
                    details={"payment_status": payment_status, "allowed": sorted(_PAYMENT_STATUSES)},
                )
            patch["payment_status"] = payment_status
        if not patch:
            raise InvalidOrderStatus("Status or payment_status is required")

        updated = self.repo.update_order(order, patch)
        logger.info(f"Order {order_id} updated: {patch}")
        return updated
