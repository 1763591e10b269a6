from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

from pm_link_auto import __version__
from pm_link_auto.app import run_linker
from pm_link_auto.config import ConfigurationError, configure_logging, get_log_level
from pm_link_auto.domain.reconciliation import DiscoveryIncompleteError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pm-link-auto",
        description=(
            "Find, configure and link the local packages declared in pm-link-auto.config.ts "
            "into the current project"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    _parse_args(args_list)

    load_dotenv(find_dotenv(usecwd=True))
    signal(SIGINT, sigint_handler)

    try:
        configure_logging(level=get_log_level())
        result = run_linker()
    except DiscoveryIncompleteError as exc:
        log.error("%s", exc)  # noqa: TRY400
        log.error("Nothing was written to the configuration file.")  # noqa: TRY400
        sys.exit(1)
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("An unexpected error occurred")
        sys.exit(1)

    if result is None:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
