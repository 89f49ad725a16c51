from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, DateTime, Index, UniqueConstraint, text
from sqlalchemy.orm import relationship

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    variant_id = Column(String, nullable=True)

    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    cart = relationship("CartModel", back_populates="items")
    product = relationship("ProductModel", lazy="joined")

    #NULL != NULL w unique constraint, wiec pozycje bez wariantu maja osobny indeks czesciowy
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "variant_id", name="u_cart_product_variant"),
        Index(
            "u_cart_product_no_variant",
            "cart_id",
            "product_id",
            unique=True,
            postgresql_where=text("variant_id IS NULL"),
            sqlite_where=text("variant_id IS NULL"),
        ),
    )
