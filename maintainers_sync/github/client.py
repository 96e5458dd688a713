"""GitHub REST client for repositories, CODEOWNERS files and user profiles."""

import base64
from typing import Any

import httpx
import structlog

from maintainers_sync.cache import ApiCache
from maintainers_sync.github.schemas import CodeownersDocument, GitHubRepository, GitHubUser

logger = structlog.get_logger()

# GitHub looks for CODEOWNERS in this order
CODEOWNERS_PATHS = [
    ".github/CODEOWNERS",
    "CODEOWNERS",
    "docs/CODEOWNERS",
]


class GitHubClient:
    """Client for the GitHub REST API.

    Provides:
    - Organization repository listing
    - CODEOWNERS retrieval, reused while a repository is unchanged
    - User profile lookup

    Every request is counted in the cache's call stats.
    """

    def __init__(
        self,
        cache: ApiCache,
        token: str = "",
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self._token = token
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GitHubClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """Connect to GitHub API."""
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        else:
            logger.warning("GitHub token not configured, using unauthenticated requests")

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.info("GitHub client connected")

    async def disconnect(self) -> None:
        """Disconnect from GitHub API."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("GitHub client not connected. Call connect() first.")
        return self._client

    async def _get(
        self,
        kind: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Issue a GET request and record it in the call stats."""
        response = await self.client.get(url, params=params)
        self.cache.stats.record_call(kind)

        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None and remaining.isdigit():
            self.cache.stats.rate_limit_remaining = int(remaining)
        return response

    async def list_repositories(
        self,
        org: str,
        ignored_repos: set[str] | None = None,
    ) -> list[GitHubRepository]:
        """List the organization's repositories, minus ignored and archived ones."""
        ignored_repos = ignored_repos or set()
        repos = []
        url = f"/orgs/{org}/repos"
        params: dict[str, Any] | None = {"per_page": 100, "type": "all"}

        while url:
            response = await self._get("repos", url, params=params)
            response.raise_for_status()

            for repo_data in response.json():
                repo = GitHubRepository.model_validate(repo_data)
                if repo.name in ignored_repos:
                    logger.debug("Repository is on the ignore list, skipping", repo=repo.name)
                    continue
                if repo.archived:
                    logger.debug("Repository is archived, skipping", repo=repo.name)
                    continue
                repos.append(repo)

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        logger.info("Repositories listed", org=org, count=len(repos))
        return repos

    async def get_codeowners_files(
        self,
        org: str,
        repos: list[GitHubRepository],
    ) -> list[CodeownersDocument]:
        """Fetch the CODEOWNERS document of each repository that has one."""
        documents = []
        for repo in repos:
            document = await self.get_codeowners(org, repo)
            if document:
                documents.append(document)

        logger.info(
            "CODEOWNERS files fetched",
            repos=len(repos),
            documents=len(documents),
        )
        return documents

    async def get_codeowners(
        self,
        org: str,
        repo: GitHubRepository,
    ) -> CodeownersDocument | None:
        """Fetch one repository's CODEOWNERS file.

        Cached results are keyed by the repository's last push, so a repo
        without new pushes is never fetched twice.
        """
        pushed_at = repo.pushed_at.isoformat() if repo.pushed_at else "never"
        cache_key = f"{org}/{repo.name}@{pushed_at}"

        cached = await self.cache.get("codeowners", cache_key)
        if cached is not None:
            if not cached.get("content"):
                return None
            return CodeownersDocument(repo=repo.name, path=cached["path"], content=cached["content"])

        document = None
        for path in CODEOWNERS_PATHS:
            response = await self._get("codeowners", f"/repos/{org}/{repo.name}/contents/{path}")
            if response.status_code == 404:
                continue
            response.raise_for_status()

            data = response.json()
            raw = base64.b64decode(data.get("content", ""))
            try:
                content = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("CODEOWNERS file is not valid UTF-8", repo=repo.name, path=path)
                content = raw.decode("utf-8", errors="replace")
            document = CodeownersDocument(repo=repo.name, path=path, content=content)
            break

        if document is None:
            logger.debug("No CODEOWNERS file found", repo=repo.name)

        await self.cache.set(
            "codeowners",
            cache_key,
            {
                "path": document.path if document else None,
                "content": document.content if document else None,
            },
        )
        return document

    async def get_profile(self, username: str) -> dict[str, Any] | None:
        """Get the roster profile of a GitHub user, or None if the account is gone."""
        key = username.lower()
        cached = await self.cache.get("profiles", key)
        if cached is not None:
            return cached

        response = await self._get("profiles", f"/users/{username}")
        if response.status_code == 404:
            return None
        response.raise_for_status()

        profile = self._parse_user(response.json()).to_profile()
        await self.cache.set("profiles", key, profile)
        return profile

    def _parse_user(self, data: dict[str, Any]) -> GitHubUser:
        """Parse user data."""
        return GitHubUser(
            login=data.get("login", ""),
            id=data.get("id", 0),
            avatar_url=data.get("avatar_url"),
            name=data.get("name"),
        )
