from __future__ import annotations

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: Union[int, str] = logging.INFO, stderr: bool = True) -> None:
    console = Console(stderr=stderr)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
