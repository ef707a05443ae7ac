"""Namespaced stdlib loggers for contractual components."""

from __future__ import annotations

import logging

LOGGER_NAME_PREFIX = "contractual"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``contractual`` logger or one of its children.

    ``get_logger("config")`` and ``get_logger("contractual.config")`` return
    the same logger.
    """
    if not name or name == LOGGER_NAME_PREFIX:
        return logging.getLogger(LOGGER_NAME_PREFIX)
    if not name.startswith(f"{LOGGER_NAME_PREFIX}."):
        name = f"{LOGGER_NAME_PREFIX}.{name}"
    return logging.getLogger(name)
