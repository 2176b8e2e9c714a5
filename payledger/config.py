"""Runtime configuration and logging setup."""

import logging

from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Options that change how the ledger engine treats edge cases."""

    # When set, a deposit reusing a tx_id already in deposit history is ignored
    # instead of being applied and overwriting the history entry.
    reject_duplicate_deposits: bool = False


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through rich, leaving stdout for results."""
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
