"""Shared logging helpers for pm-link-auto."""

from __future__ import annotations

import logging


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with defaults suited to an interactive CLI.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: INFO level
    and a terse message-only format, since every line is read by the operator running
    the command. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(levelname)-7s %(message)s",
        force=force,
    )
