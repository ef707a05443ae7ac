"""
Ordering contract for types that define the rich comparison operators.

Concrete test classes inherit from ComparableContract and provide the
``instance``, ``comparable_instance`` and ``smaller_instance`` fixtures.

The ordering under test is the three-way :meth:`ComparableContract.compare`
hook, which defaults to ``(a > b) - (a < b)``. Types ordered through a key
or a ``cmp``-style function override the hook.

The part of the ordering contract about exceptions is not verified: if
``compare(a, b)`` raises, ``compare(b, a)`` must raise as well, and test
classes for types with such behaviour should assert it themselves.

Usage:
    class TestVersion(ComparableContract):
        @pytest.fixture
        def instance(self):
            return Version(1, 2)

        @pytest.fixture
        def comparable_instance(self):
            return Version(1, 2)

        @pytest.fixture
        def smaller_instance(self):
            return Version(1, 1)
"""

from typing import Any

import pytest

from ..insist import assertion, assumption
from ..utils.exceptions import ContractViolation
from .testable import TestableContract


class ComparableContract(TestableContract):
    """Contract verifying a three-way comparison."""

    __test__ = False

    # ==================================================================
    # Fixtures (Override in concrete test classes)
    # ==================================================================

    @pytest.fixture
    def comparable_instance(self) -> Any:
        """Override this fixture to provide an instance ranked equal to ``instance``.

        It must be a different object; it need not be ``==``-equal.

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError(
            "Concrete test classes must override comparable_instance fixture"
        )

    @pytest.fixture
    def smaller_instance(self) -> Any:
        """Override this fixture to provide an instance ranked strictly below ``instance``.

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError(
            "Concrete test classes must override smaller_instance fixture"
        )

    def compare(self, a: Any, b: Any) -> int:
        """Three-way comparison: negative, zero or positive."""
        return (a > b) - (a < b)

    # ==================================================================
    # Test cases
    # ==================================================================

    def test_compare_to_none_raises(self, instance):
        """compare(a, None) raises TypeError rather than ranking None."""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        try:
            result = self.compare(a, None)
        except TypeError:
            return
        except Exception as exc:
            raise ContractViolation(
                f"Comparing to None should raise TypeError but raised "
                f"{exc.__class__.__name__}: {exc}",
                law="null rejection",
            ) from exc
        raise ContractViolation(
            f"Comparing to None should raise TypeError but returned {result!r}",
            law="null rejection",
        )

    def test_compare_to_self_is_zero(self, instance):
        """∀ a: compare(a, a) == 0"""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        assertion(
            "A comparable object should compare as zero to itself", law="self comparison"
        ).that(self.compare(a, a)).is_zero()

    def test_compare_to_comparable_is_zero(self, instance, comparable_instance):
        """compare(a, b) == 0 for a rank-equal b"""
        a = instance
        b = comparable_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)

        assertion(
            "A comparable object should compare as zero to an object of equal rank",
            law="rank equality",
        ).that(self.compare(a, b)).is_zero()

    def test_smaller_compared_to_instance_is_negative(self, instance, smaller_instance):
        """compare(smaller, a) < 0"""
        a = instance
        b = smaller_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()

        assertion(
            "A comparable object should compare as negative to an object which is greater",
            law="anti-symmetry",
        ).that(self.compare(b, a)).is_strictly_negative()

    def test_instance_compared_to_smaller_is_positive(self, instance, smaller_instance):
        """compare(a, smaller) > 0"""
        a = instance
        b = smaller_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()

        assertion(
            "A comparable object should compare as positive to an object which is smaller",
            law="anti-symmetry",
        ).that(self.compare(a, b)).is_strictly_positive()
