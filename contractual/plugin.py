"""
pytest plugin wiring contract settings and logging into a test run.

Registered through the ``pytest11`` entry point, so installing the package
is enough to enable it.
"""

import pytest

from .config import INI_OPTIONS, load_settings, reset_settings, set_settings
from .contracts.base import Contract
from .logging import get_logger, setup_logging, teardown_logging
from .utils.exceptions import ConfigurationError

logger = get_logger("plugin")

_HELP = {
    "consistency_checks": "repetitions of equality checks in consistency tests",
    "hash_checks": "repetitions of hash() in hash code stability tests",
    "assumption_policy": "'error' (default) or 'skip' when a fixture breaks a precondition",
    "log_level": "route contractual logging to loguru at this level",
}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("contractual", "contract suites")
    for field_name, (ini_key, dest) in INI_OPTIONS.items():
        group.addoption(
            f"--{dest.replace('_', '-')}",
            dest=dest,
            default=None,
            help=_HELP[field_name],
        )
        parser.addini(ini_key, help=_HELP[field_name], default=None)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "contract: test case inherited from a contractual contract suite"
    )
    try:
        settings = load_settings(config)
    except ConfigurationError as exc:
        raise pytest.UsageError(f"{exc} (parameter: {exc.config_parameter})") from exc
    set_settings(settings)
    if settings.log_level is not None:
        setup_logging(level=settings.log_level)
        config.add_cleanup(teardown_logging)
    logger.debug("contractual plugin configured: %s", settings.model_dump())


def pytest_unconfigure(config: pytest.Config) -> None:
    reset_settings()


def pytest_collection_modifyitems(items) -> None:
    for item in items:
        cls = getattr(item, "cls", None)
        if cls is not None and issubclass(cls, Contract):
            item.add_marker(pytest.mark.contract)
