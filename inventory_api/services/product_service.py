from sqlalchemy.orm import Session
import logging

from inventory_api.exceptions import InvalidInputError, ProductNotFoundError
from inventory_api.models.product import Product
from inventory_api.repositories.product_repository import ProductRepository
from inventory_api.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from inventory_api.services.validation import require_text, validate_id
from inventory_api.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service class for Product CRUD operations.

    This service handles:
    - Creating new products
    - Reading products (with caching)
    - Updating catalog fields (never stock)
    - Deleting products together with their history
    - Cache invalidation
    """

    CACHE_PREFIX = "product"

    def __init__(self, db: Session, products: ProductRepository = None, cache: CacheService = None):
        self.products = products or ProductRepository(db)
        self.cache = cache or cache_service

    def create_product(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            product_data: Product creation data

        Returns:
            Created product instance
        """
        data = product_data.model_dump()
        data["name"] = require_text(data.get("name"), "Product name must not be empty")
        data["unit"] = require_text(data.get("unit"), "Product unit must not be empty")
        for field in ("price", "cost", "stock", "min_stock"):
            if data.get(field) is not None and data[field] < 0:
                raise InvalidInputError(f"{field} must not be negative")

        product = self.products.create(data)
        logger.info(f"Product #{product.id} '{product.name}' created")
        return product

    def get_product(self, product_id: str) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product_id = validate_id(product_id)
        product = self.products.get_by_id(product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    def get_product_cached(self, product_id: str) -> dict:
        """
        Get product details from cache or database.
        Returns a dictionary (suitable for API response).
        """
        product_id = validate_id(product_id)
        cached = self.cache.get(self.CACHE_PREFIX, product_id)
        if cached:
            return cached

        product = self.get_product(product_id)
        product_dict = ProductResponse.model_validate(product).model_dump(mode="json")
        self.cache.set(self.CACHE_PREFIX, product_id, product_dict)

        # A stock change committed since the read may already have invalidated
        if self.products.current_stock(product_id) != product_dict["stock"]:
            self._invalidate_cache(product_id)
        return product_dict

    def update_product(self, product_id: str, product_data: ProductUpdate) -> Product:
        """
        Update catalog fields of an existing product.

        Raises:
            InvalidInputError: If no field was supplied
            ProductNotFoundError: If the product doesn't exist
        """
        product_id = validate_id(product_id)
        update_data = product_data.model_dump(exclude_unset=True)
        if not update_data:
            raise InvalidInputError("Update data must not be empty")
        for field in ("name", "unit"):
            if field in update_data:
                update_data[field] = require_text(update_data[field], f"Product {field} must not be empty")

        product = self.products.update(product_id, update_data)
        if not product:
            raise ProductNotFoundError(product_id)

        self._invalidate_cache(product_id)
        return product

    def delete_product(self, product_id: str) -> None:
        """
        Delete a product and, through the store's cascade, its history.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product_id = validate_id(product_id)
        if not self.products.delete(product_id):
            raise ProductNotFoundError(product_id)

        self._invalidate_cache(product_id)
        logger.info(f"Product #{product_id} deleted")

    def _invalidate_cache(self, product_id: str) -> None:
        """Invalidate cache for a product."""
        self.cache.delete(self.CACHE_PREFIX, str(product_id))
