"""
Ownership extraction module.

Turns CODEOWNERS documents into a map of current maintainers:
- Which GitHub users own code
- In which repositories they are declared
"""

from maintainers_sync.ownership.collector import collect_current_maintainers
from maintainers_sync.ownership.extractor import OwnerExtraction, extract_owners

__all__ = [
    "OwnerExtraction",
    "extract_owners",
    "collect_current_maintainers",
]
