"""YAML persistence for the maintainers roster."""

import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
import yaml

from maintainers_sync.errors import InvalidRosterError

logger = structlog.get_logger()


def load_roster(path: str | Path) -> list[dict[str, Any]]:
    """Load the roster; an empty file is an empty roster."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if not isinstance(data, list):
        raise InvalidRosterError(f"{path} must contain a list of maintainers")
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise InvalidRosterError(f"{path}: entry {index} is not a mapping: {record!r}")

    logger.debug("Roster loaded", path=str(path), maintainers=len(data))
    return data


def dump_roster(path: str | Path, roster: list[dict[str, Any]]) -> None:
    """Write the roster, replacing the previous file atomically."""
    path = Path(path)
    content = yaml.safe_dump(
        roster,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Roster written", path=str(path), maintainers=len(roster))
