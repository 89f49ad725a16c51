# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(store_id: int, order_id: int, order_number: str, total: str):
        """
        Powiadomienie wlasciciela sklepu o nowym zamowieniu.
        """
        send_order_notification_task.delay(store_id, order_id, order_number, total)

    @staticmethod
    def send_low_stock_alert(store_id: int, product_id: int, product_name: str, remaining: int):
        send_low_stock_alert_task.delay(store_id, product_id, product_name, remaining)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(store_id: int, order_id: int, order_number: str, total: str):
    logger.info(f"[NOTIFICATION] Store {store_id}: new order {order_number} (id {order_id}), total {total}")
    return {"store_id": store_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="storefront.services.notification_service.send_low_stock_alert_task")
def send_low_stock_alert_task(store_id: int, product_id: int, product_name: str, remaining: int):
    logger.info(
        f"[NOTIFICATION] Store {store_id}: low stock for \"{product_name}\" "
        f"(product {product_id}), {remaining} left"
    )
    return {"store_id": store_id, "product_id": product_id, "remaining": remaining, "status": "sent"}
