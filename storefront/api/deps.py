# storefront/api/deps.py
from functools import lru_cache

from fastapi import Header

from storefront.domain.identity import Identity
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.payment_client import PaymentGatewayClient


def get_identity(
    x_user_id: str | None = Header(None),
    x_session_id: str | None = Header(None),
) -> Identity:
    #zalogowany user ma pierwszenstwo przed sesja goscia
    if x_user_id:
        return Identity(user_id=x_user_id)
    return Identity(session_id=x_session_id or None)


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


def get_notifier() -> NotificationService:
    return NotificationService()


def get_payment_client() -> PaymentGatewayClient:
    return PaymentGatewayClient()
