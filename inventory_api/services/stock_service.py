from sqlalchemy.orm import Session
from typing import Optional
import logging

from inventory_api.exceptions import (
    InvalidInputError,
    SaleNotFoundError,
    TransactionNotFoundError,
)
from inventory_api.models.inventory_transaction import InventoryTransaction, TransactionType
from inventory_api.models.sales_record import SalesRecord
from inventory_api.repositories.movement_repository import MovementRepository
from inventory_api.repositories.sales_repository import SalesRepository
from inventory_api.services.validation import require_text, validate_id, validate_quantity
from inventory_api.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)

DEFAULT_STOCK_IN_REASON = "restock"
DEFAULT_STOCK_OUT_REASON = "shipment"


def _validate_price(price, *, allow_zero: bool) -> float:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise InvalidInputError("Unit price must be a number")
    if price < 0 or (price == 0 and not allow_zero):
        bound = "negative" if allow_zero else "zero or negative"
        raise InvalidInputError(f"Unit price must not be {bound}")
    return float(price)


class StockService:
    """
    The only sanctioned entry point for changing product stock.

    Every input is checked before a repository is called, so a rejected
    request never reaches the store. Accepted requests are handed to the
    movement or sales repository, each of which commits its ledger row and
    the stock change as a single unit.
    """

    CACHE_PREFIX = "product"

    def __init__(
        self,
        db: Session,
        movements: MovementRepository = None,
        sales: SalesRepository = None,
        cache: CacheService = None,
    ):
        self.movements = movements or MovementRepository(db)
        self.sales = sales or SalesRepository(db)
        self.cache = cache or cache_service

    def stock_in(
        self,
        product_id: str,
        quantity: int,
        unit_price: float,
        reason: Optional[str] = None,
    ) -> InventoryTransaction:
        """Receive goods: IN movement with a purchase price."""
        product_id = validate_id(product_id)
        quantity = validate_quantity(quantity)
        unit_price = _validate_price(unit_price, allow_zero=True)

        transaction = self.movements.create(
            product_id,
            TransactionType.IN,
            quantity,
            unit_price=unit_price,
            reason=(reason or "").strip() or DEFAULT_STOCK_IN_REASON,
        )
        self._invalidate_cache(product_id)
        return transaction

    def stock_out(self, product_id: str, quantity: int, reason: Optional[str] = None) -> InventoryTransaction:
        """Ship goods: OUT movement, no price."""
        product_id = validate_id(product_id)
        quantity = validate_quantity(quantity)

        transaction = self.movements.create(
            product_id,
            TransactionType.OUT,
            quantity,
            reason=(reason or "").strip() or DEFAULT_STOCK_OUT_REASON,
        )
        self._invalidate_cache(product_id)
        return transaction

    def adjust_stock(self, product_id: str, quantity: int, reason: str) -> InventoryTransaction:
        """Signed correction (count differences, breakage); a reason is mandatory."""
        product_id = validate_id(product_id)
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidInputError("Adjustment quantity must be an integer")
        if quantity == 0:
            raise InvalidInputError("Adjustment quantity must not be 0")
        reason = require_text(reason, "A reason is required for stock adjustments")

        transaction = self.movements.create(
            product_id,
            TransactionType.ADJUST,
            quantity,
            reason=reason,
        )
        self._invalidate_cache(product_id)
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        """
        Delete a movement from the history. Stock is not reversed.

        Raises:
            TransactionNotFoundError: If nothing was deleted
        """
        transaction_id = validate_id(transaction_id, "Transaction")
        if not self.movements.delete(transaction_id):
            raise TransactionNotFoundError(transaction_id)

    def record_sale(self, product_id: str, quantity: int, unit_price: float) -> SalesRecord:
        """Sell goods: sales record, stock decrement and mirrored OUT row in one unit."""
        product_id = validate_id(product_id)
        quantity = validate_quantity(quantity)
        unit_price = _validate_price(unit_price, allow_zero=False)

        sale = self.sales.create(product_id, quantity, unit_price)
        self._invalidate_cache(product_id)
        return sale

    def delete_sale(self, sale_id: str) -> None:
        """
        Delete a sales record. Stock and the mirrored movement are left untouched.

        Raises:
            SaleNotFoundError: If nothing was deleted
        """
        sale_id = validate_id(sale_id, "Sale")
        if not self.sales.delete(sale_id):
            raise SaleNotFoundError(sale_id)

    def _invalidate_cache(self, product_id: str) -> None:
        self.cache.delete(self.CACHE_PREFIX, product_id)
