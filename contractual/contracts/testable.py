"""
Instantiability contract.

Usage:
    class TestMoney(TestableContract):
        @pytest.fixture
        def instance(self):
            return Money(10, "EUR")
"""

from typing import Any

import pytest

from ..insist import assertion
from ..logging import get_logger
from ..utils.exceptions import ContractViolation
from .base import Contract

logger = get_logger("contracts.testable")


class TestableContract(Contract):
    """Contract for every instantiable type under test.

    Concrete test classes should inherit this and provide the ``instance``
    fixture. Multiple evaluations of the fixture are not required to return
    the same, or even equal, instances.
    """

    __test__ = False

    # ==================================================================
    # Fixtures (Override in concrete test classes)
    # ==================================================================

    @pytest.fixture
    def instance(self) -> Any:
        """Override this fixture to provide a non-None instance of the class under test.

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError("Concrete test classes must override instance fixture")

    # ==================================================================
    # Test cases
    # ==================================================================

    def test_can_instantiate(self, request: pytest.FixtureRequest):
        """The instance factory neither raises nor returns None."""
        try:
            a = request.getfixturevalue("instance")
        except Exception as exc:
            logger.debug("instance fixture of %s raised %r", request.cls.__name__, exc)
            raise ContractViolation(
                f"Should be able to instantiate but caught {exc.__class__.__name__}: {exc}",
                law="instantiability",
            ) from exc

        assertion(
            "Should have received a non-None instance from the instance fixture",
            law="instantiability",
        ).that(a).is_not_none()
