#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity
from storefront.data.database import get_db
from storefront.domain.identity import Identity
from storefront.domain.schemas import (
    ApiResponse,
    CartData,
    CartItemData,
    CartItemIn,
    CartItemOut,
    CartItemQuantityIn,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=ApiResponse[CartData])
def get_cart(
    store_id: int = Query(..., gt=0),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return ApiResponse(data=CartData(cart=svc.get_cart_view(store_id, identity)))


@router.post("", response_model=ApiResponse[CartItemData])
def add_item(
    payload: CartItemIn,
    response: Response,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    item, created = svc.upsert_item(
        store_id=payload.store_id,
        identity=identity,
        product_id=payload.product_id,
        variant_id=payload.variant_id,
        quantity=payload.quantity,
    )
    #nowa pozycja 201, zwiekszenie ilosci 200
    response.status_code = 201 if created else 200
    return ApiResponse(
        message="Item added to cart" if created else "Cart updated",
        data=CartItemData(item=CartItemOut.model_validate(item)),
    )


@router.put("/{item_id}", response_model=ApiResponse[CartItemData])
def update_item(
    item_id: int,
    payload: CartItemQuantityIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    item = svc.set_item_quantity(item_id, identity, payload.quantity)
    return ApiResponse(message="Cart item updated", data=CartItemData(item=CartItemOut.model_validate(item)))


@router.delete("/{item_id}", response_model=ApiResponse[dict])
def remove_item(
    item_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.remove_item(item_id, identity)
    return ApiResponse(message="Item removed from cart")


@router.delete("", response_model=ApiResponse[dict])
def clear_cart(
    store_id: int = Query(..., gt=0),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.clear(store_id, identity)
    return ApiResponse(message="Cart cleared")
