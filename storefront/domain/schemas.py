# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from storefront.utils.money import to_money

T = TypeVar("T")

# kwoty w JSON zawsze jako string z 2 miejscami, np. "62.00"
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(to_money(v)), return_type=str, when_used="json"),
]


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class ApiResponse(BaseModel, Generic[T]):
    """Koperta odpowiedzi: {success, message, data}."""

    success: bool = True
    message: str | None = None
    data: T | None = None


# cart

class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    store_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    variant_id: str | None = None
    quantity: int = 1


class CartItemQuantityIn(BaseModel):
    quantity: int


class CartProductOut(BaseModel):
    id: int
    name: str
    image: str | None = None
    price: Money
    status: str


class CartLineOut(BaseModel):
    id: int
    product_id: int
    variant_id: str | None = None
    quantity: int
    price: Money
    total: Money
    product: CartProductOut


class CartOut(BaseModel):
    id: int
    store_id: int
    items: List[CartLineOut]
    subtotal: Money
    item_count: int
    total_items: int


class CartData(BaseModel):
    cart: CartOut


class CartItemOut(BaseModel):
    id: int
    cart_id: int
    product_id: int
    variant_id: str | None = None
    quantity: int
    price: Money

    model_config = ConfigDict(from_attributes=True)


class CartItemData(BaseModel):
    item: CartItemOut


# orders

class CheckoutIn(BaseModel):
    """Schema dla checkoutu. shipping_address sprawdzany w serwisie (MissingShippingAddress)."""

    store_id: int = Field(..., gt=0)
    shipping_address: dict[str, Any] | None = None
    billing_address: dict[str, Any] | None = None
    payment_method: str | None = None
    notes: str | None = None
    tax: Decimal = Field(Decimal("0"), ge=0)
    shipping_cost: Decimal = Field(Decimal("0"), ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    variant_id: str | None = None
    product_name: str
    product_image: str | None = None
    quantity: int
    price: Money
    total: Money

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    store_id: int
    user_id: str | None = None
    order_number: str
    status: str
    payment_status: str
    payment_method: str | None = None
    payment_id: str | None = None
    subtotal: Money
    tax: Money
    shipping_cost: Money
    discount: Money
    total: Money
    currency: str
    shipping_address: dict[str, Any]
    billing_address: dict[str, Any]
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    order_items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderData(BaseModel):
    order: OrderOut


class OrderListData(BaseModel):
    orders: List[OrderOut]


class OrderStatusIn(BaseModel):
    status: str | None = None
    payment_status: str | None = None


# payments

class PaymentOrderIn(BaseModel):
    order_id: int = Field(..., gt=0)


class PaymentOrderOut(BaseModel):
    order_id: str
    amount: int
    currency: str
    key_id: str


class PaymentVerifyIn(BaseModel):
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)


class PaymentVerifyData(BaseModel):
    order: OrderOut
    payment_id: str


# products

class ProductOut(BaseModel):
    id: int
    store_id: int
    name: str
    status: str
    price: Money

    model_config = ConfigDict(from_attributes=True)


class ProductData(BaseModel):
    product: ProductOut
