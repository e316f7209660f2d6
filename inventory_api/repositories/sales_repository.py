from datetime import date, datetime, time, timedelta
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from typing import Optional
import logging

from inventory_api.exceptions import (
    InsufficientStockError,
    LedgerConflictError,
    ProductNotFoundError,
)
from inventory_api.models.product import Product
from inventory_api.models.inventory_transaction import (
    InventoryTransaction,
    TransactionType,
    SALE_REASON,
)
from inventory_api.models.sales_record import SalesRecord
from inventory_api.repositories.pagination import PageResult, paginate
from inventory_api.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SalesRepository:
    """
    Append-only store access for sales records.

    RACE CONDITION HANDLING:
    ========================
    ``create`` reads the product with SELECT ... FOR UPDATE, so a second sale
    of the same product waits until the first one commits and then sees the
    decremented stock. The decrement itself is still a guarded in-store
    update, and the products table carries a ``stock >= 0`` CHECK, so a
    backend without row locks cannot oversell either.

    Each sale touches stock exactly once. The mirrored OUT transaction is
    written directly as history and does not go through
    ``MovementRepository.create``, which would decrement a second time.
    """

    def __init__(self, db: Session, products: ProductRepository = None):
        self.db = db
        self.products = products or ProductRepository(db)

    def create(self, product_id: str, quantity: int, unit_price: float) -> SalesRecord:
        """
        Record a sale with an atomic stock check and decrement.

        Algorithm:
        1. SELECT product FOR UPDATE (locks the row)
        2. Check the product exists and has enough stock
        3. Insert the sales record
        4. Decrement product stock
        5. Insert the mirrored OUT inventory transaction
        6. Commit (releases lock)

        Raises:
            ProductNotFoundError: If product doesn't exist
            InsufficientStockError: If not enough stock available
        """
        total_amount = round(quantity * unit_price, 2)

        try:
            product = (
                self.db.query(Product)
                .filter(Product.id == product_id)
                .with_for_update()
                .first()
            )

            if not product:
                raise ProductNotFoundError(product_id)

            if product.stock < quantity:
                raise InsufficientStockError(product_id, product.stock, quantity)

            sale = SalesRecord(
                product_id=product_id,
                quantity=quantity,
                unit_price=unit_price,
                total_amount=total_amount,
            )
            self.db.add(sale)
            self.db.flush()

            if not self.products.apply_stock_delta(product_id, -quantity):
                raise InsufficientStockError(product_id)

            self.db.add(
                InventoryTransaction(
                    product_id=product_id,
                    type=TransactionType.OUT,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_amount=total_amount,
                    reason=SALE_REASON,
                )
            )
            self.db.commit()

        except (ProductNotFoundError, InsufficientStockError):
            self.db.rollback()
            raise
        except IntegrityError as e:
            # e.g. the stock CHECK fired under a concurrent sale
            self.db.rollback()
            logger.error(f"Integrity error creating sale for product #{product_id}: {e}")
            raise LedgerConflictError("Sale rejected by the store") from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating sale for product #{product_id}: {e}")
            raise

        self.db.refresh(sale)
        logger.info(f"Sale #{sale.id} of {quantity} recorded for product #{product_id}")
        return sale

    def _query(self):
        return (
            self.db.query(SalesRecord)
            .options(selectinload(SalesRecord.product))
            .order_by(SalesRecord.created_at.desc())
        )

    def get_all(self, page: int = 1, limit: int = 10) -> PageResult:
        return paginate(self._query(), page, limit)

    def get_by_product(self, product_id: str, page: int = 1, limit: int = 10) -> PageResult:
        query = self._query().filter(SalesRecord.product_id == product_id)
        return paginate(query, page, limit)

    def get_by_date_range(
        self,
        start: datetime,
        end: datetime,
        page: int = 1,
        limit: int = 10,
    ) -> PageResult:
        """Sales with start <= created_at <= end."""
        query = self._query().filter(
            SalesRecord.created_at >= start,
            SalesRecord.created_at <= end,
        )
        return paginate(query, page, limit)

    def get_by_id(self, sale_id: str) -> Optional[SalesRecord]:
        return self.db.query(SalesRecord).filter(SalesRecord.id == sale_id).first()

    def delete(self, sale_id: str) -> bool:
        """
        Delete a sales record. Neither stock nor the mirrored transaction is touched.

        Returns:
            True if a row was removed, False if none matched
        """
        try:
            deleted = (
                self.db.query(SalesRecord)
                .filter(SalesRecord.id == sale_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting sale {sale_id}: {e}")
            raise
        return deleted > 0

    def get_stats(self, today: date = None) -> dict:
        """
        Lifetime and today's sale count and revenue, aggregated in the store.
        Revenue is rounded to cents.

        "Today" runs from local midnight to the next midnight.
        """
        today = today or date.today()
        start = datetime.combine(today, time.min)
        end = start + timedelta(days=1)

        total_sales, total_revenue = self.db.query(
            func.count(SalesRecord.id),
            func.coalesce(func.sum(SalesRecord.total_amount), 0),
        ).one()

        today_sales, today_revenue = (
            self.db.query(
                func.count(SalesRecord.id),
                func.coalesce(func.sum(SalesRecord.total_amount), 0),
            )
            .filter(SalesRecord.created_at >= start, SalesRecord.created_at < end)
            .one()
        )

        return {
            "total_sales": int(total_sales),
            "total_revenue": round(float(total_revenue), 2),
            "today_sales": int(today_sales),
            "today_revenue": round(float(today_revenue), 2),
        }
