from __future__ import annotations
import logging
from rich.logging import RichHandler

def setup_logging(level: str = "INFO") -> None:
    """Route stdlib logging through rich; call once from the CLI."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
