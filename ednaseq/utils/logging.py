import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["setup_logging"]


def setup_logging(level: str = "INFO") -> None:
    """Route ednaseq log records to stderr for command-line use."""
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%x %X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
