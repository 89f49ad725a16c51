# storefront/services/product_service.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import AccessDenied, AuthenticationRequired
from storefront.domain.identity import Identity
from storefront.repos.product_repo import ProductRepo
from storefront.repos.store_repo import StoreRepo
from storefront.services.catalog import CatalogReader
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.stores = StoreRepo(db)
        self.catalog = CatalogReader(db)

    def delete_product(self, product_id: int, identity: Identity) -> tuple[str, ProductModel | None]:
        """
        Produkt z zamowieniami jest archiwizowany zamiast usuwany,
        zeby historia zamowien zostala nienaruszona. Zwraca ("archived"|"deleted", produkt).
        """
        if not identity.is_authenticated:
            raise AuthenticationRequired("Authentication required to delete a product")

        product = self.catalog.get_product(product_id)
        if not self.stores.is_owner(product.store_id, identity.user_id):
            raise AccessDenied("You do not have permission to delete this product")

        order_count = self.repo.count_order_items(product_id)
        if order_count:
            archived = self.repo.archive_product(product)
            logger.info(f"Product {product_id} archived, referenced by {order_count} order item(s)")
            return "archived", archived

        self.repo.delete_product(product_id)
        logger.info(f"Product {product_id} deleted")
        return "deleted", None
