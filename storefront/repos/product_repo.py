# storefront/repos/product_repo.py
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import InventoryUpdateFailed


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products_by_ids(self, product_ids) -> list[ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return []
        stmt = select(ProductModel).where(ProductModel.id.in_(ids))
        return list(self.db.execute(stmt).scalars().all())

    def decrement_inventory(self, product_id: int, quantity: int) -> int:
        """
        Warunkowy update: UPDATE ... SET qty = qty - n WHERE qty >= n.
        Zwraca nowy stan, przy 0 rows affected (za malo towaru) InventoryUpdateFailed.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.inventory_quantity >= quantity,
            )
            .values(inventory_quantity=ProductModel.inventory_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        if result.rowcount == 0:
            raise InventoryUpdateFailed(product_id, quantity)

        return self.db.execute(
            select(ProductModel.inventory_quantity).where(ProductModel.id == product_id)
        ).scalar_one()

    def count_order_items(self, product_id: int) -> int:
        return self.db.execute(
            select(func.count(OrderItemModel.id)).where(OrderItemModel.product_id == product_id)
        ).scalar_one()

    def archive_product(self, product: ProductModel) -> ProductModel:
        product.status = "archived"
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        #sqlite nie egzekwuje ON DELETE CASCADE bez PRAGMA, wiec czyscimy koszyki jawnie
        self.db.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.db.commit()

    def rollback(self):
        self.db.rollback()
