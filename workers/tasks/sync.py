"""Scheduled maintainers roster sync."""

import asyncio

import structlog

from maintainers_sync.config import get_settings
from maintainers_sync.sync import MaintainersSync
from workers.celery_app import app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async code in Celery tasks."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@app.task(bind=True, max_retries=3, default_retry_delay=300)
def sync_maintainers(self, dry_run: bool = False):
    """Refresh the maintainers roster from CODEOWNERS files.

    A failed run is retried; the roster is untouched by failed attempts.
    """
    result = run_async(MaintainersSync(get_settings(), dry_run=dry_run).run())

    if not result.succeeded:
        logger.error("Scheduled maintainers sync failed", error=result.error)
        raise self.retry(exc=RuntimeError(result.error))

    return result.to_dict()
