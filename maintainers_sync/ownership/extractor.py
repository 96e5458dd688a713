"""
CODEOWNERS parser.

Extracts GitHub usernames from a CODEOWNERS file. Two syntaxes are read:
- Native declarations: `<pattern> @user1 @user2 ...`
- Triager annotations in comments: `# docTriagers: user1 user2`
  (or `codeTriagers:`), a project convention for extra owners.
"""

import re
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()

TRIAGER_MARKERS = re.compile(r"docTriagers:|codeTriagers:")


@dataclass
class OwnerExtraction:
    """Result of parsing one CODEOWNERS document."""

    # Unique usernames in first-seen order
    owners: list[str] = field(default_factory=list)
    # Tokens skipped as unsupported (emails, teams)
    unsupported: list[str] = field(default_factory=list)

    def add(self, owner: str) -> None:
        """Add an owner unless it was already extracted."""
        if owner and owner not in self.owners:
            self.owners.append(owner)


def _triagers(comment: str) -> list[str]:
    """Owners listed after the first triager marker of a comment."""
    parts = TRIAGER_MARKERS.split(comment)
    if len(parts) < 2:
        return []
    # Only the segment after the first marker counts
    return [token.removeprefix("@") for token in parts[1].split()]


def extract_owners(content: str | None) -> OwnerExtraction:
    """Parse CODEOWNERS content into the set of owner usernames.

    Emails and `@org/team` handles are not supported: they are skipped,
    reported in `unsupported` and logged as warnings.
    """
    result = OwnerExtraction()
    if not content:
        return result

    for line in content.splitlines():
        # The comment ends at the next '#'
        declaration, _, comment = line.partition("#")
        comment = comment.partition("#")[0]

        for owner in _triagers(comment):
            result.add(owner)

        # First token is the path pattern
        for token in declaration.split()[1:]:
            if not token.startswith("@") or "/" in token:
                logger.warning(
                    "Skipping unsupported owner, emails and teams are not supported yet",
                    owner=token,
                )
                result.unsupported.append(token)
                continue
            result.add(token[1:])

    return result
