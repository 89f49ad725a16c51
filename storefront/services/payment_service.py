# storefront/services/payment_service.py
import hashlib
import hmac
import json

from requests import RequestException
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import InvalidPaymentSignature, OrderNotFound, PaymentGatewayError
from storefront.repos.order_repo import OrderRepo
from storefront.services.payment_client import PaymentGatewayClient
from storefront.utils.money import to_minor_units
from storefront.utils.settings import PAYMENT_KEY_ID, PAYMENT_KEY_SECRET, PAYMENT_WEBHOOK_SECRET
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def sign(secret: str, payload: bytes | str) -> str:
    if isinstance(payload, str):
        payload = payload.encode()
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


class PaymentService:
    def __init__(
        self,
        db: Session,
        client: PaymentGatewayClient,
        key_secret: str | None = None,
        webhook_secret: str | None = None,
    ):
        self.repo = OrderRepo(db)
        self.client = client
        self.key_secret = key_secret if key_secret is not None else PAYMENT_KEY_SECRET
        self.webhook_secret = webhook_secret if webhook_secret is not None else PAYMENT_WEBHOOK_SECRET

    def create_payment_order(self, order_id: int) -> dict:
        order = self.repo.get_order(order_id)
        if not order:
            raise OrderNotFound()

        #kwota z zapisanego zamowienia, nigdy nie przeliczana ani brana od klienta
        amount = to_minor_units(order.total)
        try:
            gateway_order = self.client.create_order(
                amount=amount,
                currency=order.currency,
                receipt=order.order_number,
                notes={"order_id": str(order.id), "order_number": order.order_number},
            )
        except RequestException as e:
            logger.error(f"Payment gateway order for {order.order_number} failed: {e}")
            raise PaymentGatewayError(details=str(e)) from e

        self.repo.update_order(order, {"payment_id": gateway_order["id"]})
        logger.info(f"Order {order.id} linked to gateway order {gateway_order['id']}")

        return {
            "order_id": gateway_order["id"],
            "amount": gateway_order.get("amount", amount),
            "currency": gateway_order.get("currency", order.currency),
            "key_id": PAYMENT_KEY_ID,
        }

    def verify_payment(self, gateway_order_id: str, payment_id: str, signature: str) -> OrderModel:
        expected = sign(self.key_secret, f"{gateway_order_id}|{payment_id}")
        if not hmac.compare_digest(expected, signature):
            logger.warning(f"Invalid payment signature for gateway order {gateway_order_id}")
            raise InvalidPaymentSignature()

        order = self.repo.get_order_by_payment_id(gateway_order_id)
        if not order:
            raise OrderNotFound()

        updated = self.repo.update_order(order, {"payment_status": "paid", "status": "processing"})
        logger.info(f"Payment {payment_id} verified for order {order.id}")
        return updated

    def handle_webhook(self, raw_body: bytes, signature: str | None) -> str | None:
        """Zwraca nazwe eventu. Nieznane eventy i brak zamowienia tylko logujemy."""
        if self.webhook_secret:
            if not signature or not hmac.compare_digest(sign(self.webhook_secret, raw_body), signature):
                logger.error("Invalid webhook signature")
                raise InvalidPaymentSignature("Invalid webhook signature")
        else:
            logger.warning("Webhook secret not configured, skipping signature verification")

        try:
            body = json.loads(raw_body or b"{}")
        except ValueError:
            logger.error("Webhook body is not valid JSON")
            return None

        event = body.get("event")
        payload = body.get("payload") or {}
        payment = (payload.get("payment") or {}).get("entity") or {}
        gateway_order_id = ((payload.get("order") or {}).get("entity") or {}).get("id") or payment.get("order_id")

        logger.info(f"Payment webhook received: {event} for gateway order {gateway_order_id}")

        if event not in ("payment.captured", "payment.failed"):
            logger.info(f"Unhandled webhook event: {event}")
            return event

        order = self.repo.get_order_by_payment_id(gateway_order_id) if gateway_order_id else None
        if not order:
            logger.warning(f"Order not found for gateway order {gateway_order_id}")
            return event

        if event == "payment.captured":
            patch = {"payment_status": "paid"}
            if order.status == "pending":
                patch["status"] = "processing"
        else:
            patch = {"payment_status": "failed"}

        self.repo.update_order(order, patch)
        logger.info(f"Order {order.id} updated from webhook: {patch}")
        return event
