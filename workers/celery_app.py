"""Celery application configuration."""

from celery import Celery

from maintainers_sync.config import get_settings
from workers.schedules import get_schedules

settings = get_settings()

# Create Celery app
app = Celery(
    "maintainers_sync",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "workers.tasks.sync",
    ],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=3600,  # 1 hour
    task_soft_time_limit=3300,  # 55 minutes
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    result_expires=86400,  # 24 hours
)

# Beat schedule for periodic tasks
app.conf.beat_schedule = get_schedules()

if __name__ == "__main__":
    app.start()
