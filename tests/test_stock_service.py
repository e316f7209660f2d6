"""Validation tests for StockService with the repositories mocked out."""
from unittest.mock import MagicMock

import pytest

from inventory_api.exceptions import (
    InvalidInputError,
    SaleNotFoundError,
    TransactionNotFoundError,
)
from inventory_api.models.inventory_transaction import TransactionType
from inventory_api.services.stock_service import StockService


@pytest.fixture
def repos():
    movements = MagicMock()
    sales = MagicMock()
    cache = MagicMock()
    service = StockService(db=None, movements=movements, sales=sales, cache=cache)
    return service, movements, sales, cache


@pytest.mark.parametrize(
    "product_id, quantity, unit_price",
    [
        ("", 1, 1.0),
        ("   ", 1, 1.0),
        ("p1", 0, 1.0),
        ("p1", -2, 1.0),
        ("p1", 1.5, 1.0),
        ("p1", True, 1.0),
        ("p1", 1, -0.01),
        ("p1", 1, "free"),
    ],
)
def test_stock_in_rejects_bad_input_before_store(repos, product_id, quantity, unit_price):
    service, movements, _, cache = repos

    with pytest.raises(InvalidInputError):
        service.stock_in(product_id, quantity, unit_price)

    movements.create.assert_not_called()
    cache.delete.assert_not_called()


def test_stock_in_defaults(repos):
    service, movements, _, cache = repos

    service.stock_in("p1", 3, 0)

    movements.create.assert_called_once_with(
        "p1", TransactionType.IN, 3, unit_price=0.0, reason="restock"
    )
    cache.delete.assert_called_once_with("product", "p1")


def test_stock_out_defaults_and_keeps_reason(repos):
    service, movements, _, _ = repos

    service.stock_out("p1", 2)
    service.stock_out("p1", 1, "  order #7 ")

    assert movements.create.call_args_list[0].kwargs["reason"] == "shipment"
    assert movements.create.call_args_list[1].kwargs["reason"] == "order #7"
    assert "unit_price" not in movements.create.call_args_list[0].kwargs


@pytest.mark.parametrize(
    "quantity, reason",
    [(0, "recount"), (2, ""), (2, "   "), (2, None), (1.5, "recount")],
)
def test_adjust_rejects_bad_input_before_store(repos, quantity, reason):
    service, movements, _, _ = repos

    with pytest.raises(InvalidInputError):
        service.adjust_stock("p1", quantity, reason)

    movements.create.assert_not_called()


def test_adjust_accepts_negative(repos):
    service, movements, _, _ = repos

    service.adjust_stock("p1", -4, " breakage ")

    movements.create.assert_called_once_with("p1", TransactionType.ADJUST, -4, reason="breakage")


@pytest.mark.parametrize("unit_price", [0, -1.0])
def test_sale_requires_positive_price(repos, unit_price):
    service, _, sales, _ = repos

    with pytest.raises(InvalidInputError):
        service.record_sale("p1", 1, unit_price)

    sales.create.assert_not_called()


def test_record_sale_delegates_once(repos):
    service, movements, sales, cache = repos

    service.record_sale("p1", 3, 4.0)

    sales.create.assert_called_once_with("p1", 3, 4.0)
    movements.create.assert_not_called()
    cache.delete.assert_called_once_with("product", "p1")


def test_delete_transaction_not_found(repos):
    service, movements, _, _ = repos
    movements.delete.return_value = False

    with pytest.raises(TransactionNotFoundError):
        service.delete_transaction("t1")


def test_delete_sale_not_found(repos):
    service, _, sales, _ = repos
    sales.delete.return_value = False

    with pytest.raises(SaleNotFoundError):
        service.delete_sale("s1")


def test_delete_requires_id(repos):
    service, movements, sales, _ = repos

    with pytest.raises(InvalidInputError):
        service.delete_transaction("")
    with pytest.raises(InvalidInputError):
        service.delete_sale(None)

    movements.delete.assert_not_called()
    sales.delete.assert_not_called()
