"""
Roster Reconciler - merges the previous roster with current CODEOWNERS data.

The previous roster decides ordering and carries fields this tool does not
own (e.g. `slack`, `linkedin`); the current maintainer map decides who is a
maintainer and which repositories they own.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from maintainers_sync.errors import InvalidRosterError

logger = structlog.get_logger()


def reconcile_roster(
    previous: Sequence[Mapping[str, Any]] | None,
    current: Mapping[str, Mapping[str, Any]],
) -> list[dict[str, Any]]:
    """
    Refresh the previous maintainers list against current CODEOWNERS data.

    1. Previous maintainers keep their position; `repos` and `githubID` are
       replaced, every other field is kept. Those no longer declared as
       owners anywhere are dropped.
    2. Maintainers not present in the previous roster are appended in
       discovery order.

    Args:
        previous: Previous roster records, each with a `github` field
        current: Current maintainers keyed by lower-cased username

    Returns:
        The refreshed roster
    """
    logger.info("Refreshing previous maintainers list")

    refreshed: list[dict[str, Any]] = []
    consumed: set[str] = set()

    for record in previous or []:
        github = record.get("github")
        if not github:
            raise InvalidRosterError(f"Roster entry has no 'github' field: {dict(record)!r}")

        key = str(github).lower()
        # A key already claimed by an earlier record counts as not found
        maintainer = None if key in consumed else current.get(key)
        if maintainer is None:
            logger.info(
                "Previous maintainer not found in any CODEOWNERS file, removing",
                github=github,
            )
            continue

        consumed.add(key)
        refreshed.append(
            {
                **record,
                "repos": list(maintainer["repos"]),
                "githubID": maintainer["githubID"],
            }
        )

    new_maintainers = [
        {**maintainer, "repos": list(maintainer["repos"])}
        for key, maintainer in current.items()
        if key not in consumed
    ]
    for maintainer in new_maintainers:
        logger.info("New maintainer found", github=maintainer.get("github"))

    refreshed.extend(new_maintainers)
    return refreshed
