from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, Boolean, JSON

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="draft")  # active, draft, archived

    track_inventory = Column(Boolean, nullable=False, default=False)
    inventory_quantity = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=0)
