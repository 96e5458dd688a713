"""GitHub API access."""

from maintainers_sync.github.client import CODEOWNERS_PATHS, GitHubClient
from maintainers_sync.github.schemas import CodeownersDocument, GitHubRepository, GitHubUser

__all__ = [
    "CODEOWNERS_PATHS",
    "GitHubClient",
    "CodeownersDocument",
    "GitHubRepository",
    "GitHubUser",
]
