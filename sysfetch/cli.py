"""Entry point for the sysfetch command line tool."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .formatting import print_block, render_columns
from .logo import logo_lines
from .system_state import gather_info

LOG_LEVEL_ENV = "SYSFETCH_LOG_LEVEL"

_LOGGING_CONFIGURED = False


def configure_logging(level_name: str = "WARNING") -> None:
    """Send log records to stderr through Rich so stdout only carries the block."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    effective = os.environ.get(LOG_LEVEL_ENV, level_name).upper()
    level = getattr(logging, effective, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])
    _LOGGING_CONFIGURED = True


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sysfetch",
        description="Show user, OS, hardware and uptime details next to an ASCII logo.",
    )
    parser.parse_args(argv)

    configure_logging()
    logger = logging.getLogger(__name__)

    info = gather_info()
    logger.debug("Collected %d info lines", len(info))
    print_block(render_columns(logo_lines(), info))


if __name__ == "__main__":
    main()
