"""Pytest fixtures and configuration."""

import base64
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
import yaml

from maintainers_sync.cache import ApiCache, FileCacheBackend
from maintainers_sync.config import Settings
from maintainers_sync.github.schemas import CodeownersDocument


# Test settings override
@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at temporary files."""
    return Settings(
        maintainers_file_path=str(tmp_path / "MAINTAINERS.yaml"),
        github_token="test-token",
        github_org="asyncapi",
        cache_backend="file",
        cache_file_path=str(tmp_path / "cache.json"),
        step_summary_path="",
    )


@pytest.fixture
def api_cache(tmp_path) -> ApiCache:
    """File-backed API cache in a temporary directory."""
    return ApiCache(FileCacheBackend(tmp_path / "cache.json"), ttl_seconds=3600)


def make_profile(login: str, user_id: int) -> dict[str, Any]:
    return {
        "name": login.title(),
        "github": login,
        "githubID": user_id,
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
    }


# Profile lookup stub
@pytest.fixture
def profiles() -> dict[str, dict[str, Any]]:
    """Known GitHub accounts, keyed by lower-cased login."""
    return {
        "alice": make_profile("alice", 1),
        "bob": make_profile("bob", 2),
        "carol": make_profile("carol", 3),
        "eve": make_profile("eve", 5),
    }


@pytest.fixture
def lookup_profile(profiles) -> AsyncMock:
    """Async profile lookup returning None for unknown users."""

    async def _lookup(username: str):
        return profiles.get(username.lower())

    return AsyncMock(side_effect=_lookup)


@pytest.fixture
def make_document():
    """Factory for CODEOWNERS documents."""

    def _make(repo: str, content: str) -> CodeownersDocument:
        return CodeownersDocument(repo=repo, content=content)

    return _make


@pytest.fixture
def write_roster(test_settings):
    """Write a roster to the configured maintainers file."""

    def _write(roster: list[dict[str, Any]]) -> str:
        with open(test_settings.maintainers_file_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(roster, f, sort_keys=False)
        return test_settings.maintainers_file_path

    return _write


# Fake GitHub API
class FakeGitHub:
    """In-memory GitHub REST API served through httpx.MockTransport."""

    def __init__(self, org: str = "asyncapi"):
        self.org = org
        self.repos: list[dict[str, Any]] = []
        self.files: dict[tuple[str, str], str] = {}
        self.users: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_paths: set[str] = set()

    def add_repo(
        self,
        name: str,
        codeowners: str | bytes | None = None,
        path: str = ".github/CODEOWNERS",
        archived: bool = False,
        pushed_at: str = "2024-01-01T00:00:00Z",
    ) -> None:
        self.repos.append(
            {
                "name": name,
                "full_name": f"{self.org}/{name}",
                "archived": archived,
                "fork": False,
                "pushed_at": pushed_at,
            }
        )
        if codeowners is not None:
            self.files[(name, path)] = codeowners

    def add_user(self, login: str, user_id: int, name: str | None = None) -> None:
        self.users[login.lower()] = {
            "login": login,
            "id": user_id,
            "name": name,
            "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        headers = {"x-ratelimit-remaining": "4999"}

        if path in self.fail_paths:
            return httpx.Response(500, json={"message": "Server Error"}, headers=headers)

        if path == f"/orgs/{self.org}/repos":
            return httpx.Response(200, json=self.repos, headers=headers)

        prefix = f"/repos/{self.org}/"
        if path.startswith(prefix) and "/contents/" in path:
            repo, _, file_path = path[len(prefix):].partition("/contents/")
            content = self.files.get((repo, file_path))
            if content is None:
                return httpx.Response(404, json={"message": "Not Found"}, headers=headers)
            raw = content if isinstance(content, bytes) else content.encode("utf-8")
            encoded = base64.b64encode(raw).decode("ascii")
            return httpx.Response(
                200,
                json={"path": file_path, "encoding": "base64", "content": encoded},
                headers=headers,
            )

        if path.startswith("/users/"):
            user = self.users.get(path[len("/users/"):].lower())
            if user is None:
                return httpx.Response(404, json={"message": "Not Found"}, headers=headers)
            return httpx.Response(200, json=user, headers=headers)

        return httpx.Response(404, json={"message": "Not Found"}, headers=headers)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()
