#storefront/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)

    #dokladnie jedno z dwoch: user_id (zalogowany) albo session_id (gosc)
    user_id = Column(String, nullable=True)
    session_id = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
    )

    #NULL != NULL w unique, wiec koszyki gosci nie kolidują z koszykami userow
    __table_args__ = (
        UniqueConstraint("store_id", "user_id", name="u_cart_store_user"),
        UniqueConstraint("store_id", "session_id", name="u_cart_store_session"),
    )
