# storefront/domain/errors.py
from typing import Any


class StorefrontError(Exception):
    """Bazowy blad domeny, mapowany na odpowiedz HTTP w storefront.api.errors."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class InvalidIdentity(StorefrontError):
    status_code = 400
    message = "User ID or session ID required"


class AccessDenied(StorefrontError):
    status_code = 403
    message = "You do not have permission to access this resource"


class AuthenticationRequired(StorefrontError):
    status_code = 401
    message = "Authentication required"


class CartNotFound(StorefrontError):
    status_code = 404
    message = "Cart not found"


class CartItemNotFound(StorefrontError):
    status_code = 404
    message = "Cart item not found"


class EmptyCart(StorefrontError):
    status_code = 400
    message = "Cart is empty"


class MissingShippingAddress(StorefrontError):
    status_code = 400
    message = "Shipping address is required"


class InvalidQuantity(StorefrontError):
    status_code = 400
    message = "Quantity must be at least 1"


class ProductNotFound(StorefrontError):
    status_code = 404
    message = "Product not found or not available"


class ProductUnavailable(StorefrontError):
    status_code = 400

    def __init__(self, product_id: int, product_name: str):
        super().__init__(
            f'Product "{product_name}" is not available',
            details={"product_id": product_id},
        )


class InsufficientStock(StorefrontError):
    status_code = 400

    def __init__(self, product_id: int, product_name: str, available: int, requested: int):
        self.available = available
        super().__init__(
            f'Insufficient inventory for "{product_name}". Only {available} available.',
            details={"product_id": product_id, "available": available, "requested": requested},
        )


class CheckoutInProgress(StorefrontError):
    status_code = 409
    message = "Checkout for this cart is already in progress"


class OrderNumberExhausted(StorefrontError):
    status_code = 500
    message = "Could not generate a unique order number"


class OrderCreationFailed(StorefrontError):
    status_code = 500
    message = "Failed to create order"


class InventoryUpdateFailed(StorefrontError):
    """Tylko logowany, nigdy nie wychodzi do klienta."""

    def __init__(self, product_id: int, requested: int):
        self.product_id = product_id
        self.requested = requested
        super().__init__(
            f"Could not decrement inventory of product {product_id} by {requested}",
            details={"product_id": product_id, "requested": requested},
        )


class PersistenceError(StorefrontError):
    status_code = 500
    message = "Database operation failed"


class OrderNotFound(StorefrontError):
    status_code = 404
    message = "Order not found"


class StoreNotFound(StorefrontError):
    status_code = 403
    message = "Store not found or you do not have permission"


class InvalidOrderStatus(StorefrontError):
    status_code = 400
    message = "Invalid order status"


class InvalidPaymentSignature(StorefrontError):
    status_code = 400
    message = "Invalid payment signature"


class PaymentGatewayError(StorefrontError):
    status_code = 502
    message = "Payment gateway request failed"
