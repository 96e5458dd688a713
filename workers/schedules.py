"""Celery beat schedules for periodic tasks."""

from celery.schedules import crontab

# Schedule definitions
# These are imported into celery_app.py

SCHEDULES = {
    # Roster refresh: daily at 1 AM
    "sync-maintainers-daily": {
        "task": "workers.tasks.sync.sync_maintainers",
        "schedule": crontab(minute=0, hour=1),
        "options": {"queue": "maintainers"},
    },
}


def get_schedules():
    """Get all schedules for Celery beat."""
    return SCHEDULES
