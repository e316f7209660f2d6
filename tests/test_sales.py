"""Tests for Sales API endpoints."""
import uuid
from datetime import datetime, timedelta


def _stock(client, product_id):
    return client.get(f"/api/v1/products/{product_id}").json()["data"]["stock"]


def test_stock_and_sale_scenario(client, create_product):
    """Restock, sell, then fail to oversell."""
    product = create_product(stock=10, min_stock=5)

    stock_in = client.post(
        "/api/v1/inventory/stock-in",
        json={"product_id": product["id"], "quantity": 5, "unit_price": 2.00}
    )
    assert stock_in.json()["data"]["total_amount"] == 10.00
    assert _stock(client, product["id"]) == 15

    sale = client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 3, "unit_price": 4.00}
    )
    assert sale.status_code == 201
    assert sale.json()["data"]["total_amount"] == 12.00
    assert _stock(client, product["id"]) == 12

    mirrored = client.get("/api/v1/inventory/type/out").json()["data"]["data"]
    assert len(mirrored) == 1
    assert mirrored[0]["quantity"] == 3
    assert mirrored[0]["reason"] == "sale"
    assert mirrored[0]["total_amount"] == 12.00

    stats = client.get("/api/v1/sales/stats").json()["data"]
    assert stats["today_sales"] == 1
    assert stats["today_revenue"] == 12.00

    oversell = client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 100, "unit_price": 4.00}
    )
    assert oversell.status_code == 400
    assert "Insufficient stock" in oversell.json()["error"]
    assert _stock(client, product["id"]) == 12


def test_create_sale_product_not_found(client):
    response = client.post(
        "/api/v1/sales/",
        json={"product_id": str(uuid.uuid4()), "quantity": 1, "unit_price": 1.0}
    )

    assert response.status_code == 404


def test_create_sale_zero_price(client, create_product):
    product = create_product()

    response = client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 1, "unit_price": 0}
    )

    assert response.status_code == 422
    assert _stock(client, product["id"]) == 10


def test_create_sale_infinite_price_rejected(client, create_product):
    product = create_product()
    body = '{"product_id": "%s", "quantity": 1, "unit_price": Infinity}' % product["id"]

    response = client.post(
        "/api/v1/sales/",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert _stock(client, product["id"]) == 10


def test_sale_queues_low_stock_check(client, create_product, low_stock_task):
    product = create_product(stock=6, min_stock=5)

    client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 2, "unit_price": 1.5}
    )

    low_stock_task.assert_called_once_with(product["id"])


def test_sales_stats(client, create_product):
    product = create_product(stock=20)
    for quantity in (1, 2, 3):
        client.post(
            "/api/v1/sales/",
            json={"product_id": product["id"], "quantity": quantity, "unit_price": 2.5}
        )

    stats = client.get("/api/v1/sales/stats").json()["data"]

    assert stats["total_sales"] == 3
    assert stats["total_revenue"] == 15.0
    assert stats["today_sales"] == 3
    assert stats["today_revenue"] == 15.0


def test_sales_stats_empty(client):
    stats = client.get("/api/v1/sales/stats").json()["data"]

    assert stats == {"total_sales": 0, "total_revenue": 0.0, "today_sales": 0, "today_revenue": 0.0}


def test_sales_by_date_range(client, create_product):
    product = create_product(stock=20)
    client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 1, "unit_price": 2.0}
    )
    now = datetime.now()

    inside = client.get(
        "/api/v1/sales/date-range",
        params={
            "start_date": (now - timedelta(hours=1)).isoformat(),
            "end_date": (now + timedelta(hours=1)).isoformat(),
        }
    )
    assert inside.status_code == 200
    assert inside.json()["data"]["total"] == 1

    outside = client.get(
        "/api/v1/sales/date-range",
        params={
            "start_date": (now - timedelta(days=3)).isoformat(),
            "end_date": (now - timedelta(days=2)).isoformat(),
        }
    )
    assert outside.json()["data"]["total"] == 0


def test_sales_by_date_range_reversed(client):
    now = datetime.now()

    response = client.get(
        "/api/v1/sales/date-range",
        params={
            "start_date": now.isoformat(),
            "end_date": (now - timedelta(days=1)).isoformat(),
        }
    )

    assert response.status_code == 400


def test_list_sales_by_product(client, create_product):
    pen = create_product(name="Pen", stock=10)
    paper = create_product(name="Paper", category="paper", stock=10)
    client.post("/api/v1/sales/", json={"product_id": pen["id"], "quantity": 1, "unit_price": 1.0})
    client.post("/api/v1/sales/", json={"product_id": paper["id"], "quantity": 1, "unit_price": 1.0})
    client.post("/api/v1/sales/", json={"product_id": pen["id"], "quantity": 2, "unit_price": 1.0})

    data = client.get(f"/api/v1/sales/product/{pen['id']}").json()["data"]

    assert data["total"] == 2
    assert all(item["product_name"] == "Pen" for item in data["data"])
    assert client.get("/api/v1/sales/").json()["data"]["total"] == 3


def test_delete_sale_keeps_stock_and_mirror(client, create_product):
    """Deleting a sale removes the sales row only."""
    product = create_product(stock=10)
    sale = client.post(
        "/api/v1/sales/",
        json={"product_id": product["id"], "quantity": 4, "unit_price": 1.0}
    ).json()["data"]

    response = client.delete(f"/api/v1/sales/{sale['id']}")

    assert response.status_code == 200
    assert client.get("/api/v1/sales/").json()["data"]["total"] == 0
    assert client.get("/api/v1/inventory/").json()["data"]["total"] == 1
    assert _stock(client, product["id"]) == 6

    assert client.delete(f"/api/v1/sales/{sale['id']}").status_code == 404
