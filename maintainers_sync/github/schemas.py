"""GitHub data schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class GitHubUser(BaseModel):
    """GitHub user schema."""

    login: str
    id: int
    avatar_url: str | None = None
    name: str | None = None

    def to_profile(self) -> dict[str, Any]:
        """Convert to the profile fields stored in the maintainers roster."""
        profile = {
            "name": self.name or self.login,
            "github": self.login,
            "githubID": self.id,
            "avatar_url": self.avatar_url,
        }
        return {key: value for key, value in profile.items() if value is not None}


class GitHubRepository(BaseModel):
    """GitHub repository schema."""

    name: str
    full_name: str = ""
    archived: bool = False
    fork: bool = False
    pushed_at: datetime | None = None


class CodeownersDocument(BaseModel):
    """Raw CODEOWNERS content fetched from one repository."""

    repo: str
    content: str
    path: str = "CODEOWNERS"
