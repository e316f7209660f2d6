from datetime import datetime
from sqlalchemy.orm import Session
from typing import List

from inventory_api.exceptions import InvalidInputError
from inventory_api.models.product import Product, ProductCategory
from inventory_api.models.inventory_transaction import TransactionType
from inventory_api.repositories.movement_repository import MovementRepository
from inventory_api.repositories.pagination import PageResult
from inventory_api.repositories.product_repository import ProductRepository
from inventory_api.repositories.sales_repository import SalesRepository
from inventory_api.services.validation import require_text, validate_id, validate_pagination


def _as_local_naive(value: datetime) -> datetime:
    """Ledger timestamps are naive local time; bring aware bounds onto the same clock."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class ReportingService:
    """Read-only listings and aggregate figures over products and the ledger."""

    def __init__(
        self,
        db: Session,
        products: ProductRepository = None,
        movements: MovementRepository = None,
        sales: SalesRepository = None,
    ):
        self.products = products or ProductRepository(db)
        self.movements = movements or MovementRepository(db, self.products)
        self.sales = sales or SalesRepository(db, self.products)

    # Products

    def list_products(self, page: int = 1, limit: int = 10) -> PageResult:
        validate_pagination(page, limit)
        return self.products.get_all(page, limit)

    def list_products_by_category(self, category: ProductCategory, page: int = 1, limit: int = 10) -> PageResult:
        validate_pagination(page, limit)
        return self.products.get_by_category(category, page, limit)

    def search_products(self, keyword: str, page: int = 1, limit: int = 10) -> PageResult:
        keyword = require_text(keyword, "Search keyword must not be empty")
        validate_pagination(page, limit)
        return self.products.search(keyword, page, limit)

    def low_stock_products(self) -> List[Product]:
        return self.products.get_low_stock()

    def product_stats(self) -> dict:
        """
        Catalog size, low-stock count and inventory value (sum of stock x cost).

        Loads the whole catalog; fine for a single shop, a store-side SUM
        would be needed for a large one.
        """
        products = self.products.list_all()
        total_value = sum(p.stock * p.cost for p in products)
        return {
            "total_products": len(products),
            "low_stock_products": sum(1 for p in products if p.is_low_stock),
            "total_value": round(total_value, 2),
        }

    # Inventory transactions

    def list_transactions(self, page: int = 1, limit: int = 10) -> PageResult:
        validate_pagination(page, limit)
        return self.movements.get_all(page, limit)

    def transactions_by_product(self, product_id: str, page: int = 1, limit: int = 10) -> PageResult:
        product_id = validate_id(product_id)
        validate_pagination(page, limit)
        return self.movements.get_by_product(product_id, page, limit)

    def transactions_by_type(self, transaction_type: TransactionType, page: int = 1, limit: int = 10) -> PageResult:
        validate_pagination(page, limit)
        return self.movements.get_by_type(transaction_type, page, limit)

    # Sales

    def list_sales(self, page: int = 1, limit: int = 10) -> PageResult:
        validate_pagination(page, limit)
        return self.sales.get_all(page, limit)

    def sales_by_product(self, product_id: str, page: int = 1, limit: int = 10) -> PageResult:
        product_id = validate_id(product_id)
        validate_pagination(page, limit)
        return self.sales.get_by_product(product_id, page, limit)

    def sales_by_date_range(self, start: datetime, end: datetime, page: int = 1, limit: int = 10) -> PageResult:
        if start is None or end is None:
            raise InvalidInputError("Both start and end dates are required")
        start, end = _as_local_naive(start), _as_local_naive(end)
        if start >= end:
            raise InvalidInputError("Start date must be before end date")
        validate_pagination(page, limit)
        return self.sales.get_by_date_range(start, end, page, limit)

    def sales_stats(self) -> dict:
        return self.sales.get_stats()
