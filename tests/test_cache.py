"""Tests for the Redis cache wrapper and cached product reads."""
import json
from datetime import datetime
from unittest.mock import MagicMock

import redis

from inventory_api.models.product import Product, ProductCategory
from inventory_api.services.product_service import ProductService
from inventory_api.utils.cache import CacheService


def test_set_and_get_use_namespaced_keys():
    client = MagicMock()
    cache = CacheService(client=client, ttl=60, enabled=True)

    assert cache.set("product", "abc", {"stock": 3}) is True
    client.setex.assert_called_once_with("product:abc", 60, json.dumps({"stock": 3}))

    client.get.return_value = json.dumps({"stock": 3})
    assert cache.get("product", "abc") == {"stock": 3}
    client.get.assert_called_with("product:abc")


def test_redis_errors_degrade_to_miss():
    client = MagicMock()
    client.get.side_effect = redis.ConnectionError("down")
    client.delete.side_effect = redis.ConnectionError("down")
    cache = CacheService(client=client, ttl=60, enabled=True)

    assert cache.get("product", "abc") is None
    assert cache.delete("product", "abc") is False


def test_disabled_cache_never_touches_redis():
    client = MagicMock()
    cache = CacheService(client=client, ttl=60, enabled=False)

    assert cache.get("product", "abc") is None
    assert cache.set("product", "abc", {}) is False
    assert cache.delete("product", "abc") is False
    client.assert_not_called()
    client.get.assert_not_called()
    client.setex.assert_not_called()


def _cached_product_service(stock_after_read):
    product = Product(
        id="p-1",
        name="Gel Pen",
        category=ProductCategory.PEN,
        unit="piece",
        price=1.5,
        cost=0.8,
        stock=10,
        min_stock=2,
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )
    products = MagicMock()
    products.get_by_id.return_value = product
    products.current_stock.return_value = stock_after_read
    cache = MagicMock()
    cache.get.return_value = None
    return ProductService(MagicMock(), products=products, cache=cache), cache


def test_cached_read_keeps_entry_when_stock_unchanged():
    service, cache = _cached_product_service(stock_after_read=10)

    data = service.get_product_cached("p-1")

    assert data["stock"] == 10
    cache.set.assert_called_once_with("product", "p-1", data)
    cache.delete.assert_not_called()


def test_cached_read_drops_entry_when_stock_moved_meanwhile():
    service, cache = _cached_product_service(stock_after_read=7)

    data = service.get_product_cached("p-1")

    assert data["stock"] == 10
    cache.set.assert_called_once()
    cache.delete.assert_called_once_with("product", "p-1")
