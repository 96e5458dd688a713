"""Maintainers roster: reconciliation, persistence and change reporting."""

from maintainers_sync.roster.reconciler import reconcile_roster
from maintainers_sync.roster.store import dump_roster, load_roster
from maintainers_sync.roster.summary import ChangeSummary, publish_summary, summarize_changes

__all__ = [
    "reconcile_roster",
    "load_roster",
    "dump_roster",
    "ChangeSummary",
    "summarize_changes",
    "publish_summary",
]
