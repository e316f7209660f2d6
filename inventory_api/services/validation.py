"""Input checks shared by the services. Each raises InvalidInputError."""
from inventory_api.exceptions import InvalidInputError

MAX_PAGE_LIMIT = 100


def validate_id(value, label: str = "Product") -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(f"{label} ID must not be empty")
    return str(value).strip()


def validate_quantity(quantity) -> int:
    """Positive integer; bools are not quantities."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInputError("Quantity must be an integer")
    if quantity <= 0:
        raise InvalidInputError("Quantity must be greater than 0")
    return quantity


def validate_pagination(page: int, limit: int) -> None:
    if page < 1:
        raise InvalidInputError("Page must be greater than 0")
    if limit < 1 or limit > MAX_PAGE_LIMIT:
        raise InvalidInputError(f"Limit must be between 1 and {MAX_PAGE_LIMIT}")


def require_text(value, message: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(message)
    return str(value).strip()
