# storefront/services/catalog.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import ProductNotFound
from storefront.repos.product_repo import ProductRepo


class CatalogReader:
    """Aktualny stan produktow (status, cena, stan magazynu). Bez cache."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ProductNotFound()
        return product

    def get_products_by_ids(self, product_ids) -> dict[int, ProductModel]:
        return {p.id: p for p in self.repo.get_products_by_ids(product_ids)}
