"""
Celery application - optional task queue for outbound notifications.
Challenge: Keep webhook delivery off the HTTP request path; bounded retries.
Design: RabbitMQ broker; results are not stored (fire-and-forget).
"""

from celery import Celery

from replate.config import get_settings

settings = get_settings()

celery_app = Celery(
    "replate",
    broker=settings.celery_broker_url,
    include=["replate.queue.tasks"],
)

# Task settings: time limits, serialization
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    task_ignore_result=True,
    task_time_limit=60,
    task_soft_time_limit=30,
    worker_prefetch_multiplier=1,  # Fair distribution
)
