# storefront/api/routers/payments.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from storefront.api.deps import get_payment_client
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ApiResponse,
    OrderOut,
    PaymentOrderIn,
    PaymentOrderOut,
    PaymentVerifyData,
    PaymentVerifyIn,
)
from storefront.services.payment_client import PaymentGatewayClient
from storefront.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


def get_service(db: Session, client: PaymentGatewayClient):
    return PaymentService(db, client)


@router.post("/create-order", response_model=ApiResponse[PaymentOrderOut])
def create_payment_order(
    payload: PaymentOrderIn,
    db: Session = Depends(get_db),
    client: PaymentGatewayClient = Depends(get_payment_client),
):
    data = get_service(db, client).create_payment_order(payload.order_id)
    return ApiResponse(data=PaymentOrderOut(**data))


@router.post("/verify", response_model=ApiResponse[PaymentVerifyData])
def verify_payment(
    payload: PaymentVerifyIn,
    db: Session = Depends(get_db),
    client: PaymentGatewayClient = Depends(get_payment_client),
):
    order = get_service(db, client).verify_payment(
        payload.razorpay_order_id,
        payload.razorpay_payment_id,
        payload.razorpay_signature,
    )
    return ApiResponse(
        message="Payment verified successfully",
        data=PaymentVerifyData(order=OrderOut.model_validate(order), payment_id=payload.razorpay_payment_id),
    )


async def get_raw_body(request: Request) -> bytes:
    #podpis liczony z surowego body, wiec nie parsujemy go modelem
    return await request.body()


@router.post("/webhook")
def payment_webhook(
    raw_body: bytes = Depends(get_raw_body),
    x_razorpay_signature: str | None = Header(None),
    db: Session = Depends(get_db),
    client: PaymentGatewayClient = Depends(get_payment_client),
):
    event = get_service(db, client).handle_webhook(raw_body, x_razorpay_signature)
    return {
        "success": True,
        "message": "Webhook processed successfully",
        "event": event,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
