"""Logging setup using Rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("selenium", "urllib3")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a Rich console handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    console = Console(stderr=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                show_time=True,
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )
        ],
        force=True,
    )

    # Driver HTTP chatter drowns out polling logs
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
