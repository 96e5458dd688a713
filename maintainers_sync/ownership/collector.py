"""
Maintainer Collector - builds the current maintainer map.

Runs the CODEOWNERS parser over every fetched document and resolves each
owner to a GitHub profile. Profiles are looked up at most once per
lower-cased username per pass, even when the lookup finds nothing.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import structlog

from maintainers_sync.github.schemas import CodeownersDocument
from maintainers_sync.ownership.extractor import extract_owners

logger = structlog.get_logger()

ProfileLookup = Callable[[str], Awaitable[dict[str, Any] | None]]


async def collect_current_maintainers(
    documents: Iterable[CodeownersDocument],
    lookup_profile: ProfileLookup,
    ignored_users: Iterable[str] = (),
) -> dict[str, dict[str, Any]]:
    """
    Collect maintainers from all CODEOWNERS documents.

    Args:
        documents: CODEOWNERS documents in processing order
        lookup_profile: Async profile lookup, returns None for unknown users
        ignored_users: Usernames to skip (compared case-insensitively)

    Returns:
        Mapping of lower-cased username to profile plus `repos`
    """
    ignored = {user.lower() for user in ignored_users}
    current: dict[str, dict[str, Any]] = {}
    looked_up: dict[str, dict[str, Any] | None] = {}

    logger.info("Fetching GitHub profile information for each codeowner")

    for document in documents:
        extraction = extract_owners(document.content)

        for owner in extraction.owners:
            key = owner.lower()
            if key in ignored:
                logger.debug(
                    "User is on the ignore list, skipping",
                    repo=document.repo,
                    user=owner,
                )
                continue

            if key not in looked_up:
                # Also confirms the account still exists
                looked_up[key] = await lookup_profile(owner)

            profile = looked_up[key]
            if not profile:
                logger.warning(
                    "GitHub profile not found",
                    repo=document.repo,
                    user=owner,
                )
                continue

            entry = current.setdefault(key, {**profile, "repos": []})
            if document.repo not in entry["repos"]:
                entry["repos"].append(document.repo)

    logger.info("Collected current maintainers", count=len(current))
    return current
