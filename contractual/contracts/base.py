"""
Common base class for contract suites.

A contract suite is a pytest test class that is never collected itself;
concrete test classes that inherit from it are collected automatically.
"""

import pytest

from ..config import ContractSettings, get_settings


class Contract:
    """Base of every contract suite.

    Subclasses that declare ``__test__`` themselves (the contract suites do,
    with ``False``) keep their value; every other subclass is collected.
    """

    __test__ = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "__test__" not in vars(cls):
            cls.__test__ = True

    @pytest.fixture
    def contract_settings(self) -> ContractSettings:
        """Active contract settings (resolved by the pytest plugin at configure time)."""
        return get_settings()
