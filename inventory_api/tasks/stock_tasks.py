import logging

from kombu.exceptions import OperationalError

from inventory_api.tasks.celery_app import celery_app
from inventory_api.database import SessionLocal
from inventory_api.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="check_low_stock")
def check_low_stock(self, product_id: str) -> dict:
    """
    Background task raising a low-stock alert for a product.

    Scheduled after every committed stock-out, adjustment and sale. It only
    reads; the alert itself is a WARNING log line a notifier can pick up.

    Args:
        product_id: ID of the product whose stock just went down

    Returns:
        Dictionary with the check result
    """
    db = SessionLocal()

    try:
        product = ProductRepository(db).get_by_id(product_id)

        if not product:
            logger.warning(f"Low-stock check skipped: product #{product_id} no longer exists")
            return {"status": "skipped", "product_id": product_id}

        result = {
            "product_id": product_id,
            "stock": product.stock,
            "min_stock": product.min_stock,
        }

        if product.is_low_stock:
            logger.warning(
                f"Low stock alert: '{product.name}' (#{product_id}) "
                f"has {product.stock} left, threshold {product.min_stock}"
            )
            return {"status": "low_stock", **result}

        return {"status": "ok", **result}

    finally:
        db.close()


def schedule_low_stock_check(product_id: str) -> None:
    """
    Queue check_low_stock for a product whose stock went down.

    Called after the stock change has committed, so a broker outage is
    logged rather than failing the request.
    """
    try:
        check_low_stock.delay(product_id)
    except OperationalError as e:
        logger.error(f"Could not queue low-stock check for product #{product_id}: {e}")
