from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from inventory_api.exceptions import (
    InsufficientStockError,
    LedgerConflictError,
    ProductNotFoundError,
)
from inventory_api.models.inventory_transaction import (
    InventoryTransaction,
    TransactionType,
    stock_delta,
)
from inventory_api.repositories.pagination import PageResult, paginate
from inventory_api.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class MovementRepository:
    """
    Append-only store access for inventory transactions.

    STOCK CONSISTENCY:
    ==================
    ``create`` inserts the ledger row and applies its stock delta to the
    product in one database transaction. The delta is pushed into the store
    as ``stock = stock + delta`` guarded by ``stock + delta >= 0``, so two
    concurrent movements on the same product can never lose each other's
    update, and no movement can drive stock negative. Either both writes
    commit or neither does.
    """

    def __init__(self, db: Session, products: ProductRepository = None):
        self.db = db
        self.products = products or ProductRepository(db)

    def create(
        self,
        product_id: str,
        transaction_type: TransactionType,
        quantity: int,
        unit_price: Optional[float] = None,
        reason: Optional[str] = None,
    ) -> InventoryTransaction:
        """
        Record a movement and apply it to the product's stock atomically.

        Algorithm:
        1. Insert the transaction row
        2. Derive the signed delta from the movement type
        3. Apply the delta with an in-store increment
        4. Commit (or roll back everything)

        Raises:
            ProductNotFoundError: If the product doesn't exist
            InsufficientStockError: If the movement would make stock negative
            LedgerConflictError: If the store rejects the unit for another integrity reason
        """
        total_amount = round(quantity * unit_price, 2) if unit_price is not None else None
        transaction = InventoryTransaction(
            product_id=product_id,
            type=transaction_type,
            quantity=quantity,
            unit_price=unit_price,
            total_amount=total_amount,
            reason=reason,
        )
        delta = stock_delta(transaction_type, quantity)

        try:
            self.db.add(transaction)
            self.db.flush()

            if not self.products.apply_stock_delta(product_id, delta):
                available = self.products.current_stock(product_id)
                if available is None:
                    raise ProductNotFoundError(product_id)
                raise InsufficientStockError(product_id, available, -delta)

            self.db.commit()

        except (ProductNotFoundError, InsufficientStockError):
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Integrity error recording {transaction_type.value} movement: {e}")
            if self.products.get_by_id(product_id) is None:
                raise ProductNotFoundError(product_id) from e
            raise LedgerConflictError("Stock movement rejected by the store") from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error recording {transaction_type.value} movement: {e}")
            raise

        self.db.refresh(transaction)
        logger.info(
            f"Movement #{transaction.id} ({transaction_type.value} {quantity}) "
            f"applied to product #{product_id}"
        )
        return transaction

    def _query(self):
        return (
            self.db.query(InventoryTransaction)
            .options(selectinload(InventoryTransaction.product))
            .order_by(InventoryTransaction.created_at.desc())
        )

    def get_all(self, page: int = 1, limit: int = 10) -> PageResult:
        return paginate(self._query(), page, limit)

    def get_by_product(self, product_id: str, page: int = 1, limit: int = 10) -> PageResult:
        query = self._query().filter(InventoryTransaction.product_id == product_id)
        return paginate(query, page, limit)

    def get_by_type(self, transaction_type: TransactionType, page: int = 1, limit: int = 10) -> PageResult:
        query = self._query().filter(InventoryTransaction.type == transaction_type)
        return paginate(query, page, limit)

    def get_by_id(self, transaction_id: str) -> Optional[InventoryTransaction]:
        return (
            self.db.query(InventoryTransaction)
            .filter(InventoryTransaction.id == transaction_id)
            .first()
        )

    def delete(self, transaction_id: str) -> bool:
        """
        Delete a ledger row. History only: product stock is left as it is.

        Returns:
            True if a row was removed, False if none matched
        """
        try:
            deleted = (
                self.db.query(InventoryTransaction)
                .filter(InventoryTransaction.id == transaction_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting movement {transaction_id}: {e}")
            raise
        return deleted > 0
