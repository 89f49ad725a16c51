from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity
from storefront.data.database import get_db
from storefront.domain.identity import Identity
from storefront.domain.schemas import ApiResponse, ProductData, ProductOut
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.delete("/{product_id}", response_model=ApiResponse[ProductData])
def delete_product(
    product_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    outcome, product = ProductService(db).delete_product(product_id, identity)
    if outcome == "archived":
        return ApiResponse(
            message="Product archived successfully. Products with orders cannot be permanently deleted.",
            data=ProductData(product=ProductOut.model_validate(product)),
        )
    return ApiResponse(message="Product deleted successfully")
