"""
Logging setup: standard logging records rendered by rich on the diagnostic stream.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import *

_handler = None


def configure(debug=False, /, console=Unset):
    """
    install (once) a RichHandler on the 'bbl' logger and set its level.

    debug=True logs everything from DEBUG up; otherwise only warnings and errors.
    calling again only updates the level (and the console, when given).
    """
    global _handler

    logger = logging.getLogger("bbl")
    if _handler is None:
        _handler = RichHandler(
            console=coalesce(console, Console(stderr=True)),
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_handler)
        logger.propagate = False
    elif console is not Unset:
        _handler.console = console

    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger


__all__ = (
    "configure",
)
