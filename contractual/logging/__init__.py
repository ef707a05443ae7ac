"""
Logging infrastructure for contractual.

Library code logs through namespaced stdlib loggers (``contractual.*``);
:func:`setup_logging` optionally routes that tree into loguru sinks.
"""

from .config import LOGGER_NAME_PREFIX, get_logger
from .loguru_bootstrap import InterceptHandler, setup_logging, teardown_logging

__all__ = [
    "LOGGER_NAME_PREFIX",
    "InterceptHandler",
    "get_logger",
    "setup_logging",
    "teardown_logging",
]
