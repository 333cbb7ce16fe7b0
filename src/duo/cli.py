"""Command line entry point."""

import asyncio
import logging
import sys
from typing import Optional, Sequence

import httpx

from duo.config import get_settings, resolve_run_config
from duo.exceptions import DuoError, HttpError
from duo.services.runner import PracticeRunner

UNAUTHORIZED_HINT = "Hint: check that DUOLINGO_JWT is still valid and has not expired."


def configure_logging(level: str) -> None:
    """Send diagnostics to stderr at the requested level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def report_failure(exc: Exception) -> None:
    """Print a human-readable summary of a fatal error to stderr."""
    print("\n❌ Something went wrong during the run.", file=sys.stderr)
    print(f"Error details: {exc}", file=sys.stderr)
    if isinstance(exc, HttpError) and exc.unauthorized:
        print(UNAUTHORIZED_HINT, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the lessons; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        config = resolve_run_config(args, settings)
        asyncio.run(PracticeRunner(config, settings).run())
    except (DuoError, httpx.HTTPError) as exc:
        report_failure(exc)
        return 1
    return 0
