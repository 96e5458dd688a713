"""Unit tests for settings."""

import pytest

from maintainers_sync.config import Settings, parse_comma_separated


class TestParseCommaSeparated:
    """Tests for comma-separated input lists."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, []),
            ("", []),
            ("a", ["a"]),
            (" a , b ,c ", ["a", "b", "c"]),
            ("a,,b, ,", ["a", "b"]),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_comma_separated(value) == expected


class TestSettings:
    """Tests for environment-driven settings."""

    def test_reads_workflow_environment(self, monkeypatch):
        """Test the variable names used by the CI workflow are honoured."""
        monkeypatch.setenv("MAINTAINERS_FILE_PATH", "MAINTAINERS.yaml")
        monkeypatch.setenv("GH_TOKEN", "secret")
        monkeypatch.setenv("IGNORED_REPOSITORIES", "shape-up-process, ,glee-hello-world")
        monkeypatch.setenv("IGNORED_USERS", " AsyncAPI-Bot ,dependabot,")

        settings = Settings(_env_file=None)

        assert settings.maintainers_file_path == "MAINTAINERS.yaml"
        assert settings.github_token.get_secret_value() == "secret"
        assert settings.ignored_repos_set == {"shape-up-process", "glee-hello-world"}
        assert settings.ignored_users_set == {"asyncapi-bot", "dependabot"}

    def test_repository_owner_fallback(self, monkeypatch):
        """Test the organization defaults to the workflow's repository owner."""
        monkeypatch.delenv("GITHUB_ORG", raising=False)
        monkeypatch.setenv("GITHUB_REPOSITORY_OWNER", "asyncapi")

        settings = Settings(_env_file=None)

        assert settings.github_org == "asyncapi"

    def test_defaults(self, monkeypatch):
        """Test optional settings have safe defaults."""
        for name in ("MAINTAINERS_FILE_PATH", "IGNORED_REPOSITORIES", "IGNORED_USERS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.maintainers_file_path == ""
        assert settings.ignored_repos_set == set()
        assert settings.ignored_users_set == set()
        assert settings.cache_backend == "file"
