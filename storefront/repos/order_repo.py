# storefront/repos/order_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def order_number_exists(self, order_number: str) -> bool:
        stmt = select(OrderModel.id).where(OrderModel.order_number == order_number)
        return self.db.execute(stmt).first() is not None

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def add_order_items(self, items: list[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.commit()

    def delete_order(self, order_id: int) -> int:
        #tylko jako akcja kompensujaca, zamowienia to zapis finansowy
        self.db.execute(delete(OrderItemModel).where(OrderItemModel.order_id == order_id))
        result = self.db.execute(delete(OrderModel).where(OrderModel.id == order_id))
        self.db.commit()
        return result.rowcount

    def get_order(self, order_id: int) -> OrderModel | None:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.order_items))
            .where(OrderModel.id == order_id)
        )
        return self.db.execute(stmt).scalars().first()

    def get_order_by_payment_id(self, payment_id: str) -> OrderModel | None:
        stmt = select(OrderModel).where(OrderModel.payment_id == payment_id)
        return self.db.execute(stmt.order_by(OrderModel.id)).scalars().first()

    def list_orders_by_user(self, user_id: str) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.order_items))
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_orders_by_store(self, store_id: int, limit: int = 50, offset: int = 0) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.order_items))
            .where(OrderModel.store_id == store_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def update_order(self, order: OrderModel, patch: dict) -> OrderModel:
        for key, value in patch.items():
            setattr(order, key, value)
        self.db.commit()
        self.db.refresh(order)
        return order

    def rollback(self):
        self.db.rollback()
