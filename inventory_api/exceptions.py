"""
Domain errors raised by repositories and services.

The HTTP layer maps each class to a status code through ``status_code``;
nothing below the API layer knows about HTTP beyond that attribute.
"""


class InventoryError(Exception):
    """Base class for all inventory domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(InventoryError):
    """Input was malformed or out of range; rejected before touching the store."""

    status_code = 400


class NotFoundError(InventoryError):
    """A referenced row does not exist."""

    status_code = 404


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class TransactionNotFoundError(NotFoundError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Inventory transaction with ID {transaction_id} not found")
        self.transaction_id = transaction_id


class SaleNotFoundError(NotFoundError):
    def __init__(self, sale_id: str):
        super().__init__(f"Sales record with ID {sale_id} not found")
        self.sale_id = sale_id


class InsufficientStockError(InventoryError):
    """The requested quantity exceeds the product's current stock."""

    status_code = 400

    def __init__(self, product_id: str, available: int = None, requested: int = None):
        if available is None:
            message = f"Insufficient stock for product {product_id}"
        else:
            message = (
                f"Insufficient stock. Available: {available}, Requested: {requested}"
            )
        super().__init__(message)
        self.product_id = product_id
        self.available = available
        self.requested = requested


class LedgerConflictError(InventoryError):
    """The store rejected a write unit because of an integrity violation."""

    status_code = 409
