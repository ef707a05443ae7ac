"""
Pytest configuration for the contractual test suite.

The contractual plugin itself is loaded through its ``pytest11`` entry point;
``pytester`` is enabled here for tests that run inner pytest sessions.
"""

import pytest

from contractual.config import ContractSettings, get_settings, set_settings

pytest_plugins = ["pytester"]


@pytest.fixture
def use_settings():
    """Temporarily activate contract settings, restoring the previous ones afterwards."""
    previous = get_settings()

    def _activate(**values) -> ContractSettings:
        settings = ContractSettings(**values)
        set_settings(settings)
        return settings

    yield _activate
    set_settings(previous)


@pytest.fixture
def default_settings() -> ContractSettings:
    return ContractSettings()
