from sqlalchemy.orm import Session
from sqlalchemy import delete, or_, select, update
from typing import Optional, List
import logging

from inventory_api.models.product import Product, ProductCategory
from inventory_api.repositories.pagination import PageResult, paginate

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Store access for the products table.

    Stock is never written through ``update``; it only moves through
    ``apply_stock_delta``, which the movement and sales repositories call
    inside their own write units.
    """

    UPDATABLE_FIELDS = ("name", "category", "description", "unit", "price", "cost", "min_stock")
    NULLABLE_FIELDS = ("description",)

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, page: int = 1, limit: int = 10) -> PageResult:
        query = self.db.query(Product).order_by(Product.created_at.desc())
        return paginate(query, page, limit)

    def list_all(self) -> List[Product]:
        """Every product, unpaged."""
        return self.db.query(Product).order_by(Product.created_at.desc()).all()

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get a product by ID; None when absent."""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_by_category(self, category: ProductCategory, page: int = 1, limit: int = 10) -> PageResult:
        query = (
            self.db.query(Product)
            .filter(Product.category == category)
            .order_by(Product.created_at.desc())
        )
        return paginate(query, page, limit)

    def get_low_stock(self) -> List[Product]:
        """Products at or below their threshold, lowest stock first."""
        return (
            self.db.query(Product)
            .filter(Product.stock <= Product.min_stock)
            .order_by(Product.stock.asc())
            .all()
        )

    def search(self, keyword: str, page: int = 1, limit: int = 10) -> PageResult:
        """Case-insensitive substring match over name and description."""
        pattern = f"%{keyword}%"
        query = (
            self.db.query(Product)
            .filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
            .order_by(Product.created_at.desc())
        )
        return paginate(query, page, limit)

    def create(self, data: dict) -> Product:
        product = Product(
            name=data["name"],
            category=data["category"],
            description=data.get("description"),
            unit=data["unit"],
            price=data["price"],
            cost=data["cost"],
            stock=data.get("stock", 0),
            min_stock=data.get("min_stock", 0),
        )
        try:
            self.db.add(product)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating product: {e}")
            raise
        self.db.refresh(product)
        return product

    def update(self, product_id: str, data: dict) -> Optional[Product]:
        """
        Partially update a product.

        Only UPDATABLE_FIELDS are written. An empty field set is a no-op that
        returns the current row unchanged.

        Returns:
            Updated product or None if not found
        """
        values = {
            k: v for k, v in data.items()
            if k in self.UPDATABLE_FIELDS and (v is not None or k in self.NULLABLE_FIELDS)
        }
        if not values:
            return self.get_by_id(product_id)

        product = self.get_by_id(product_id)
        if not product:
            return None

        for field, value in values.items():
            setattr(product, field, value)

        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating product {product_id}: {e}")
            raise
        self.db.refresh(product)
        return product

    def delete(self, product_id: str) -> bool:
        """
        Delete a product; its ledger rows go with it through the FK cascade.

        Returns:
            True if a row was removed, False if none matched
        """
        try:
            result = self.db.execute(delete(Product).where(Product.id == product_id))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting product {product_id}: {e}")
            raise
        return result.rowcount > 0

    def apply_stock_delta(self, product_id: str, delta: int) -> bool:
        """
        Atomically add delta to a product's stock inside the caller's transaction.

        Pushed into the store as ``stock = stock + delta`` and guarded so the
        result can never go below zero. Does not commit.

        Returns:
            True if the row was updated, False if the product is missing or
            the change would make stock negative
        """
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock + delta >= 0)
            .values(stock=Product.stock + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def current_stock(self, product_id: str) -> Optional[int]:
        """Stock as the current transaction sees it; None when the product is absent."""
        return self.db.execute(
            select(Product.stock).where(Product.id == product_id)
        ).scalar_one_or_none()
