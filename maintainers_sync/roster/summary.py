"""Change summary between two versions of the roster."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger()


@dataclass
class ChangeSummary:
    """Maintainers added, removed and with changed repositories."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    # github -> (previous repos, current repos)
    updated: dict[str, tuple[list[str], list[str]]] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.updated)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "added": self.added,
            "removed": self.removed,
            "updated": {
                github: {"previous": previous, "current": current}
                for github, (previous, current) in self.updated.items()
            },
        }

    def to_markdown(self) -> str:
        """Render the summary as a markdown report."""
        if not self.has_changes:
            return "## Maintainers\n\nNo changes.\n"

        lines = ["## Maintainers", ""]
        if self.added:
            lines.append(f"### Added ({len(self.added)})")
            lines.extend(f"- @{github}" for github in self.added)
            lines.append("")
        if self.removed:
            lines.append(f"### Removed ({len(self.removed)})")
            lines.extend(f"- @{github}" for github in self.removed)
            lines.append("")
        if self.updated:
            lines.append(f"### Updated repositories ({len(self.updated)})")
            lines.append("")
            lines.append("| Maintainer | Added repos | Removed repos |")
            lines.append("|---|---|---|")
            for github, (previous, current) in self.updated.items():
                gained = ", ".join(r for r in current if r not in previous) or "-"
                lost = ", ".join(r for r in previous if r not in current) or "-"
                lines.append(f"| @{github} | {gained} | {lost} |")
            lines.append("")
        return "\n".join(lines)


def _by_key(roster: Sequence[Mapping[str, Any]] | None) -> dict[str, Mapping[str, Any]]:
    return {str(record["github"]).lower(): record for record in roster or [] if record.get("github")}


def summarize_changes(
    previous: Sequence[Mapping[str, Any]] | None,
    refreshed: Sequence[Mapping[str, Any]],
) -> ChangeSummary:
    """Compare two rosters by case-insensitive GitHub username."""
    before = _by_key(previous)
    after = _by_key(refreshed)
    summary = ChangeSummary()

    for key, record in after.items():
        if key not in before:
            summary.added.append(record["github"])
            continue
        previous_repos = list(before[key].get("repos") or [])
        current_repos = list(record.get("repos") or [])
        if sorted(previous_repos) != sorted(current_repos):
            summary.updated[record["github"]] = (previous_repos, current_repos)

    summary.removed = [record["github"] for key, record in before.items() if key not in after]
    return summary


def publish_summary(summary: ChangeSummary, step_summary_path: str = "") -> None:
    """Log the summary and append it to the CI job summary file, if any."""
    logger.info(
        "Maintainers changes",
        added=len(summary.added),
        removed=len(summary.removed),
        updated=len(summary.updated),
    )
    if not step_summary_path:
        return

    with open(Path(step_summary_path), "a", encoding="utf-8") as f:
        f.write(summary.to_markdown())
        f.write("\n")
