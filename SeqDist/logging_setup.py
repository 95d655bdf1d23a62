"""
Rich logging configuration for applications embedding SeqDist.

The library itself only creates module loggers under the ``SeqDist``
namespace; nothing is emitted until a handler is installed here (or by the
host application).

© SeqDist
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "seqdist-rich"


def _level_for(verbose: int) -> int:
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbose: int = 0) -> RichHandler:
    """
    Install a Rich handler on the ``SeqDist`` logger, writing to stderr.

    Levels: WARNING (0), INFO (1), DEBUG (2+). Calling it again replaces the
    handler installed by a previous call instead of stacking another one.
    """
    logger = logging.getLogger("SeqDist")
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = RichHandler(
        console=Console(file=sys.stderr),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    level = _level_for(verbose)
    handler.setLevel(level)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
