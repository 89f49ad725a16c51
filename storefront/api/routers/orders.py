# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity, get_lock_service, get_notifier
from storefront.data.database import get_db
from storefront.domain.identity import Identity
from storefront.domain.schemas import (
    ApiResponse,
    CheckoutIn,
    OrderData,
    OrderListData,
    OrderOut,
    OrderStatusIn,
)
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=ApiResponse[OrderData], status_code=201)
def create_order(
    payload: CheckoutIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Checkout: koszyk -> zamowienie.
    Gosc identyfikowany przez X-Session-Id, zalogowany przez X-User-Id.
    """
    svc = CheckoutService(db, lock_service=lock_service, notifier=notifier)
    order = svc.checkout(payload, identity)
    return ApiResponse(
        message="Order created successfully",
        data=OrderData(order=OrderOut.model_validate(order)),
    )


@router.get("/my", response_model=ApiResponse[OrderListData])
def get_my_orders(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    orders = get_service(db).list_user_orders(identity)
    return ApiResponse(data=OrderListData(orders=[OrderOut.model_validate(o) for o in orders]))


@router.get("/store/{store_id}", response_model=ApiResponse[OrderListData])
def get_store_orders(
    store_id: int,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    orders = get_service(db).list_store_orders(store_id, identity, limit=limit, offset=offset)
    return ApiResponse(data=OrderListData(orders=[OrderOut.model_validate(o) for o in orders]))


@router.get("/{order_id}", response_model=ApiResponse[OrderData])
def get_order(
    order_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    order = get_service(db).get_order(order_id, identity)
    return ApiResponse(data=OrderData(order=OrderOut.model_validate(order)))


@router.put("/{order_id}/status", response_model=ApiResponse[OrderData])
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    order = get_service(db).update_status(
        order_id,
        identity,
        status=payload.status,
        payment_status=payload.payment_status,
    )
    return ApiResponse(
        message="Order updated successfully",
        data=OrderData(order=OrderOut.model_validate(order)),
    )
