"""Command-line entry point for the maintainers sync."""

import argparse
import asyncio
import logging
import sys

import structlog

from maintainers_sync.config import Settings, get_settings
from maintainers_sync.sync import MaintainersSync


def configure_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maintainers-sync",
        description="Refresh the maintainers roster from the CODEOWNERS files of a GitHub organization",
    )
    parser.add_argument("--org", help="GitHub organization (default: GITHUB_ORG)")
    parser.add_argument(
        "--maintainers-file",
        help="Path to the maintainers YAML file (default: MAINTAINERS_FILE_PATH)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the refreshed roster without writing it",
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL)")
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        help="Log output format (default: LOG_FORMAT)",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command-line options applied."""
    updates = {
        "github_org": args.org,
        "maintainers_file_path": args.maintainers_file,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    return settings.model_copy(update={k: v for k, v in updates.items() if v})


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    configure_logging(settings.log_level, settings.log_format)

    result = asyncio.run(MaintainersSync(settings, dry_run=args.dry_run).run())
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
