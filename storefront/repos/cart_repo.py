# storefront/repos/cart_repo.py
from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_owner(
        self,
        store_id: int,
        user_id: str | None,
        session_id: str | None,
    ) -> CartModel | None:
        stmt = select(CartModel).where(CartModel.store_id == store_id)
        if user_id:
            stmt = stmt.where(CartModel.user_id == user_id)
        else:
            stmt = stmt.where(CartModel.session_id == session_id)
        return self.db.execute(stmt.order_by(CartModel.id)).scalars().first()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at, CartItemModel.id)
        )
        return list(self.db.execute(stmt).scalars().unique().all())

    def get_cart_item(
        self,
        cart_id: int,
        product_id: int,
        variant_id: str | None,
    ) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        if variant_id:
            stmt = stmt.where(CartItemModel.variant_id == variant_id)
        else:
            stmt = stmt.where(CartItemModel.variant_id.is_(None))
        return self.db.execute(stmt).scalars().first()

    def product_quantity_in_cart(
        self,
        cart_id: int,
        product_id: int,
        exclude_item_id: int | None = None,
    ) -> int:
        """Suma ilosci wszystkich wariantow produktu w koszyku."""
        stmt = select(func.coalesce(func.sum(CartItemModel.quantity), 0)).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        if exclude_item_id is not None:
            stmt = stmt.where(CartItemModel.id != exclude_item_id)
        return self.db.execute(stmt).scalar_one()

    def get_cart_item_by_id(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def save_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_cart_item(self, item_id: int) -> int:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.id == item_id))
        self.db.commit()
        return result.rowcount

    def clear_cart(self, cart_id: int) -> int:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
