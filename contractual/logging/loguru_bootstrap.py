"""
Optional loguru routing for the ``contractual`` logger tree.

Library modules log through stdlib loggers. When a run asks for contract
logging (``--contract-log-level``), :func:`setup_logging` attaches loguru
sinks and points the ``contractual`` logger at them. Sinks added here are
tracked by id, so :func:`teardown_logging` removes only those and leaves any
loguru configuration of the host project alone.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger as _logger

from .config import LOGGER_NAME_PREFIX

SINK_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[stdlib_name]}</cyan> - <level>{message}</level>"
)

_sink_ids: List[int] = []


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the originating logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _logger.bind(stdlib_name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _only_contract_records(record) -> bool:
    return "stdlib_name" in record["extra"]


def _add_sink(sink, level: str, serialize: bool) -> None:
    _sink_ids.append(
        _logger.add(
            sink,
            level=level,
            format=SINK_FORMAT,
            filter=_only_contract_records,
            backtrace=False,
            diagnose=False,
            serialize=serialize,
        )
    )


def setup_logging(
    *,
    level: str = "INFO",
    console: bool = True,
    file_path: Optional[str | Path] = None,
    serialize: bool = False,
) -> None:
    """Route the ``contractual`` logger tree into loguru sinks.

    Args:
        level: Minimum level, both for the sinks and the stdlib logger
        console: Add a stderr sink
        file_path: Add a file sink at this path
        serialize: Write records as JSON lines
    """
    teardown_logging()
    lvl = level.upper()
    if console:
        _add_sink(sys.stderr, lvl, serialize)
    if file_path:
        _add_sink(str(file_path), lvl, serialize)

    package_logger = logging.getLogger(LOGGER_NAME_PREFIX)
    package_logger.handlers = [InterceptHandler()]
    package_logger.setLevel(getattr(logging, lvl, logging.INFO))
    # pytest's capture handlers live on the root logger and stay untouched
    package_logger.propagate = False


def teardown_logging() -> None:
    """Remove the sinks added by :func:`setup_logging` and restore stdlib propagation."""
    while _sink_ids:
        _logger.remove(_sink_ids.pop())
    package_logger = logging.getLogger(LOGGER_NAME_PREFIX)
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
