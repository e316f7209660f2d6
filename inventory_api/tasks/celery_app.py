from celery import Celery

from inventory_api.config import get_settings

settings = get_settings()

# Create Celery application
celery_app = Celery(
    "inventory",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["inventory_api.tasks.stock_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Low-stock alerts go to their own queue
    task_routes={"check_low_stock": {"queue": "stock-alerts"}},
    task_time_limit=60,
    task_soft_time_limit=45,
    result_expires=3600,

    # Publishing runs after the request has committed
    task_publish_retry_policy={"max_retries": 2, "interval_start": 0, "interval_step": 0.5},

    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)
