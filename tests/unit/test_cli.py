"""Unit tests for the command-line entry point and scheduled task."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from maintainers_sync import cli
from maintainers_sync.sync import SyncResult


def make_result(status: str, error: str | None = None) -> SyncResult:
    return SyncResult(
        started_at=datetime.now(timezone.utc),
        completed_at=datetime.now(timezone.utc),
        status=status,
        error=error,
    )


class TestCli:
    """Tests for `maintainers-sync`."""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self):
        with patch.object(cli, "configure_logging") as mock:
            yield mock

    def test_overrides_settings(self, test_settings):
        """Test command-line options take precedence over the environment."""
        args = cli.build_parser().parse_args(
            ["--org", "other-org", "--maintainers-file", "roster.yaml", "--log-level", "DEBUG"]
        )

        settings = cli.apply_overrides(test_settings, args)

        assert settings.github_org == "other-org"
        assert settings.maintainers_file_path == "roster.yaml"
        assert settings.log_level == "DEBUG"
        assert settings.github_token.get_secret_value() == "test-token"

    def test_keeps_settings_without_options(self, test_settings):
        """Test omitted options leave settings alone."""
        args = cli.build_parser().parse_args([])

        settings = cli.apply_overrides(test_settings, args)

        assert settings == test_settings

    @pytest.mark.parametrize("status,exit_code", [("succeeded", 0), ("failed", 1)])
    def test_exit_code(self, test_settings, status, exit_code):
        """Test the exit code reflects the run status."""
        with patch.object(cli, "get_settings", return_value=test_settings), \
                patch.object(cli, "MaintainersSync") as sync_cls:
            sync_cls.return_value.run = AsyncMock(return_value=make_result(status))

            assert cli.main(["--dry-run"]) == exit_code

        assert sync_cls.call_args.kwargs["dry_run"] is True


class TestSyncTask:
    """Tests for the Celery task."""

    @pytest.fixture
    def task_module(self):
        from workers.tasks import sync as task_module

        return task_module

    def test_returns_result(self, task_module, test_settings):
        """Test a successful run returns the serialized result."""
        with patch.object(task_module, "get_settings", return_value=test_settings), \
                patch.object(task_module, "MaintainersSync") as sync_cls:
            sync_cls.return_value.run = AsyncMock(return_value=make_result("succeeded"))

            result = task_module.sync_maintainers()

        assert result["status"] == "succeeded"

    def test_failed_run_raises(self, task_module, test_settings):
        """Test a failed run surfaces its error for retry."""
        with patch.object(task_module, "get_settings", return_value=test_settings), \
                patch.object(task_module, "MaintainersSync") as sync_cls:
            sync_cls.return_value.run = AsyncMock(
                return_value=make_result("failed", "ConfigurationError: missing")
            )

            with pytest.raises(RuntimeError, match="missing"):
                task_module.sync_maintainers()

    def test_daily_schedule(self):
        """Test the beat schedule runs the sync task."""
        from workers.celery_app import app

        entry = app.conf.beat_schedule["sync-maintainers-daily"]
        assert entry["task"] == "workers.tasks.sync.sync_maintainers"
