"""Maintainers sync run: GitHub → CODEOWNERS → roster."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

import httpx
import structlog

from maintainers_sync.cache import ApiCache, create_cache
from maintainers_sync.config import Settings
from maintainers_sync.errors import ConfigurationError
from maintainers_sync.github import GitHubClient
from maintainers_sync.ownership import collect_current_maintainers
from maintainers_sync.roster import (
    ChangeSummary,
    dump_roster,
    load_roster,
    publish_summary,
    reconcile_roster,
    summarize_changes,
)

logger = structlog.get_logger()


@dataclass
class SyncResult:
    """Result of a sync run."""

    started_at: datetime
    completed_at: datetime | None = None
    status: Literal["running", "succeeded", "failed"] = "running"
    dry_run: bool = False
    repositories: int = 0
    documents: int = 0
    maintainers_before: int = 0
    maintainers_after: int = 0
    changes: ChangeSummary | None = None
    api_usage: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"

    @property
    def duration_seconds(self) -> float:
        """Calculate duration in seconds."""
        if not self.completed_at:
            return 0
        return (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "repositories": self.repositories,
            "documents": self.documents,
            "maintainers_before": self.maintainers_before,
            "maintainers_after": self.maintainers_after,
            "changes": self.changes.to_dict() if self.changes else None,
            "api_usage": self.api_usage,
            "error": self.error,
        }


class MaintainersSync:
    """Refreshes the maintainers roster from the organization's CODEOWNERS files.

    The roster file is rewritten only once the current maintainers have been
    collected and reconciled; a failed run leaves it untouched.
    """

    def __init__(
        self,
        settings: Settings,
        dry_run: bool = False,
        cache: ApiCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.dry_run = dry_run
        self._cache = cache
        self._transport = transport

    def validate(self) -> None:
        """Fail fast on missing configuration, before any I/O."""
        if not self.settings.maintainers_file_path:
            raise ConfigurationError("The MAINTAINERS_FILE_PATH is not defined")
        if not self.settings.github_org:
            raise ConfigurationError("The GitHub organization is not defined")

    async def run(self) -> SyncResult:
        """Run the complete sync."""
        result = SyncResult(
            started_at=datetime.now(timezone.utc),
            dry_run=self.dry_run,
        )

        logger.info(
            "Starting maintainers sync",
            org=self.settings.github_org,
            roster=self.settings.maintainers_file_path,
            dry_run=self.dry_run,
        )

        try:
            await self._sync(result)
            result.status = "succeeded"
        except Exception as e:
            logger.exception("Maintainers sync failed", error=str(e))
            result.status = "failed"
            result.error = f"{type(e).__name__}: {e}"
        finally:
            result.completed_at = datetime.now(timezone.utc)

        logger.info(
            "Maintainers sync finished",
            status=result.status,
            duration_seconds=result.duration_seconds,
        )
        return result

    async def _sync(self, result: SyncResult) -> None:
        self.validate()
        settings = self.settings

        previous = load_roster(settings.maintainers_file_path)
        result.maintainers_before = len(previous)

        cache = self._cache or create_cache(settings)
        github = GitHubClient(
            cache,
            token=settings.github_token.get_secret_value(),
            base_url=settings.github_api_url,
            timeout=settings.request_timeout,
            transport=self._transport,
        )

        async with cache, github:
            repos = await github.list_repositories(
                settings.github_org,
                settings.ignored_repos_set,
            )
            result.repositories = len(repos)

            documents = await github.get_codeowners_files(settings.github_org, repos)
            result.documents = len(documents)

            # 1. Collect maintainers from every CODEOWNERS file in the organization
            current = await collect_current_maintainers(
                documents,
                github.get_profile,
                settings.ignored_users_set,
            )

            # 2. Refresh repos of known maintainers and append new ones
            refreshed = reconcile_roster(previous, current)
            result.maintainers_after = len(refreshed)

            if self.dry_run:
                logger.info("Dry run, roster not written", maintainers=len(refreshed))
            else:
                dump_roster(settings.maintainers_file_path, refreshed)

            cache.stats.log()
            result.api_usage = cache.stats.to_dict()

        result.changes = summarize_changes(previous, refreshed)
        publish_summary(result.changes, settings.step_summary_path)
