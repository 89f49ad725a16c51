# storefront/services/payment_client.py
import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import PAYMENT_GATEWAY_URL, PAYMENT_KEY_ID, PAYMENT_KEY_SECRET
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentGatewayClient:
    def __init__(
        self,
        base_url: str | None = None,
        key_id: str | None = None,
        key_secret: str | None = None,
        timeout: int = 5,
    ):
        self.base_url = (base_url or PAYMENT_GATEWAY_URL).rstrip("/")
        self.key_id = key_id if key_id is not None else PAYMENT_KEY_ID
        self.key_secret = key_secret if key_secret is not None else PAYMENT_KEY_SECRET
        self.timeout = timeout

    @http_retry()
    def create_order(self, amount: int, currency: str, receipt: str, notes: dict | None = None) -> dict:
        """amount w najmniejszej jednostce waluty (grosze, centy)."""
        url = f"{self.base_url}/orders"
        logger.info(f"PaymentGatewayClient POST {url} receipt={receipt}")

        resp = requests.post(
            url,
            json={
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
                "notes": notes or {},
            },
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
