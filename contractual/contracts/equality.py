"""
Equality contract for types that define ``__eq__`` (and therefore ``__hash__``).

Concrete test classes inherit from EqualityContract and provide the
``instance``, ``equal_instance_supplier`` and ``non_equal_instance`` fixtures.

Usage:
    class TestMoney(EqualityContract):
        @pytest.fixture
        def instance(self):
            return Money(10, "EUR")

        @pytest.fixture
        def equal_instance_supplier(self):
            return lambda: Money(10, "EUR")

        @pytest.fixture
        def non_equal_instance(self):
            return Money(11, "EUR")

Equality is not friendly to inheritance. This contract checks the laws
between instances of one class but cannot check them up or down a hierarchy:

    class A:
        def __init__(self, i):
            self.i = i

        def __eq__(self, other):
            return isinstance(other, A) and self.i == other.i

    class B(A):
        def __init__(self, i, j):
            super().__init__(i)
            self.j = j

        def __eq__(self, other):
            return isinstance(other, B) and super().__eq__(other) and self.j == other.j

    A(1) == B(1, 2)  # True
    B(1, 2) == A(1)  # False

which is why the class under test is also required to be final.
"""

from typing import Any, Callable

import pytest

from ..config import ContractSettings
from ..insist import assert_all, assertion, assumption
from ..introspection import is_final
from ..logging import get_logger
from ..utils.exceptions import ContractViolation
from .testable import TestableContract

logger = get_logger("contracts.equality")


def _hash(value: Any) -> int:
    try:
        return hash(value)
    except TypeError as exc:
        raise ContractViolation(
            f"A class that overrides equality should be hashable, but hash() raised: {exc}",
            law="hashability",
        ) from exc


class EqualityContract(TestableContract):
    """Contract verifying the laws of ``==`` and their coupling to ``hash()``.

    All implementations must pass these tests to be considered valid.
    Each test verifies its fixture preconditions as assumptions first.
    """

    __test__ = False

    # ==================================================================
    # Fixtures (Override in concrete test classes)
    # ==================================================================

    @pytest.fixture
    def equal_instance_supplier(self) -> Callable[[], Any]:
        """Override this fixture to provide a supplier of equal instances.

        Every call of the returned supplier must return a new, non-None
        instance equal to ``instance``. Given ``a = instance``,
        ``b = supplier()`` and ``c = supplier()``:

            a is not b, a is not c, b is not c
            a == b, a == c, b == c

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError(
            "Concrete test classes must override equal_instance_supplier fixture"
        )

    @pytest.fixture
    def non_equal_instance(self) -> Any:
        """Override this fixture to provide a new non-None instance not equal to ``instance``.

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError(
            "Concrete test classes must override non_equal_instance fixture"
        )

    # ==================================================================
    # Structure
    # ==================================================================

    def test_class_is_final(self, instance):
        """An instantiable class that overrides equality cannot be subclassed."""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        assertion(
            f"An instantiable class that overrides equality should be final, "
            f"but {type(a).__qualname__} can be subclassed",
            law="finality",
        ).that(is_final(type(a))).is_true()

    # ==================================================================
    # Foreign values
    # ==================================================================

    def test_not_equal_to_none(self, instance):
        """∀ a: a != None"""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        assertion("An object should not be equal to None", law="null inequality").that(
            a
        ).is_not_equal_to(None)

    def test_not_equal_to_unrelated_type(self, instance):
        """∀ a: a != object()"""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        assertion(
            "An object should not be equal to an instance of an unrelated type",
            law="cross-type inequality",
        ).that(a).is_not_equal_to(object())

    # ==================================================================
    # Reflexivity, symmetry, transitivity
    # ==================================================================

    def test_reflexivity(self, instance):
        """∀ a: a == a"""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        assertion(
            "Equality should be reflexive such that 'a == a' is true",
            law="reflexivity",
        ).that(a).is_equal_to(a)

    def test_symmetry_of_equal_objects(self, instance, equal_instance_supplier):
        """∀ a, b: a == b ⇒ b == a"""
        a = instance
        b = equal_instance_supplier()
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'a' be equal to 'b'").that(a).is_equal_to(b)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)

        assertion(
            "Equality should be symmetric so that if 'a == b' then also 'b == a'",
            law="symmetry",
        ).that(b).is_equal_to(a)

    def test_symmetry_of_non_equal_objects(self, instance, non_equal_instance):
        """∀ a, b: a != b ⇒ b != a"""
        a = instance
        b = non_equal_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'a' not be equal to 'b'").that(
            a
        ).is_not_equal_to(b)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)

        assertion(
            "Equality should be symmetric so that if 'a != b' then also 'b != a'",
            law="symmetry",
        ).that(b).is_not_equal_to(a)

    def test_transitivity_of_equal_objects(self, instance, equal_instance_supplier):
        """∀ a, b, c: a == b ∧ b == c ⇒ a == c"""
        a = instance
        b = equal_instance_supplier()
        c = equal_instance_supplier()
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'c' be non-None").that(c).is_not_none()
        assumption("This test requires that 'a' be equal to 'b'").that(a).is_equal_to(b)
        assumption("This test requires that 'b' be equal to 'c'").that(b).is_equal_to(c)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)
        assumption("This test requires that 'a' and 'c' be different instances").that(
            a
        ).is_not_same_as(c)
        assumption("This test requires that 'b' and 'c' be different instances").that(
            b
        ).is_not_same_as(c)

        assertion(
            "Equality should be transitive so that if 'a == b' and 'b == c' then also 'a == c'",
            law="transitivity",
        ).that(a).is_equal_to(c)

    def test_transitivity_of_non_equal_objects(
        self, instance, equal_instance_supplier, non_equal_instance
    ):
        """∀ a, b, c: a == b ∧ b != c ⇒ a != c"""
        a = instance
        b = equal_instance_supplier()
        c = non_equal_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'c' be non-None").that(c).is_not_none()
        assumption("This test requires that 'a' be equal to 'b'").that(a).is_equal_to(b)
        assumption("This test requires that 'b' not be equal to 'c'").that(
            b
        ).is_not_equal_to(c)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)
        assumption("This test requires that 'a' and 'c' be different instances").that(
            a
        ).is_not_same_as(c)
        assumption("This test requires that 'b' and 'c' be different instances").that(
            b
        ).is_not_same_as(c)

        assertion(
            "Equality should be transitive so that if 'a == b' and 'b != c' then also 'a != c'",
            law="transitivity",
        ).that(a).is_not_equal_to(c)

    # ==================================================================
    # Consistency
    # ==================================================================

    def test_consistency_of_equal_objects(
        self, instance, equal_instance_supplier, contract_settings: ContractSettings
    ):
        """Repeated 'a == b' without mutation keeps returning True."""
        a = instance
        b = equal_instance_supplier()
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'a' be equal to 'b'").that(a).is_equal_to(b)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)

        logger.debug(
            "Re-evaluating equality of %s %d times",
            type(a).__qualname__,
            contract_settings.consistency_checks,
        )
        for attempt in range(1, contract_settings.consistency_checks + 1):
            assertion(
                f"Equality should be consistent so that repeated 'a == b' keeps "
                f"returning True (attempt {attempt})",
                law="consistency",
            ).that(a).is_equal_to(b)

    def test_consistency_of_non_equal_objects(
        self, instance, non_equal_instance, contract_settings: ContractSettings
    ):
        """Repeated 'a == b' without mutation keeps returning False."""
        a = instance
        b = non_equal_instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'a' not be equal to 'b'").that(
            a
        ).is_not_equal_to(b)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)

        for attempt in range(1, contract_settings.consistency_checks + 1):
            assertion(
                f"Equality should be consistent so that repeated 'a == b' keeps "
                f"returning False (attempt {attempt})",
                law="consistency",
            ).that(a).is_not_equal_to(b)

    # ==================================================================
    # Hash codes
    # ==================================================================

    def test_hash_code_consistency(self, instance, contract_settings: ContractSettings):
        """Repeated hash(a) returns the same value."""
        a = instance
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()

        hash_code = _hash(a)
        for attempt in range(1, contract_settings.hash_checks + 1):
            assertion(
                f"An object should return the same hash code through repeated "
                f"calls to hash() (attempt {attempt})",
                law="hash code consistency",
            ).that(_hash(a)).is_equal_to(hash_code)

    def test_equal_objects_have_equal_hash_codes(self, instance, equal_instance_supplier):
        """∀ a, b: a == b ⇒ hash(a) == hash(b)"""
        a = instance
        b = equal_instance_supplier()
        c = equal_instance_supplier()
        assumption("This test requires that 'a' be non-None").that(a).is_not_none()
        assumption("This test requires that 'b' be non-None").that(b).is_not_none()
        assumption("This test requires that 'c' be non-None").that(c).is_not_none()
        assumption("This test requires that 'a' be equal to 'b'").that(a).is_equal_to(b)
        assumption("This test requires that 'b' be equal to 'c'").that(b).is_equal_to(c)
        assumption("This test requires that 'a' be equal to 'c'").that(a).is_equal_to(c)
        assumption("This test requires that 'a' and 'b' be different instances").that(
            a
        ).is_not_same_as(b)
        assumption("This test requires that 'a' and 'c' be different instances").that(
            a
        ).is_not_same_as(c)
        assumption("This test requires that 'b' and 'c' be different instances").that(
            b
        ).is_not_same_as(c)

        hash_code = _hash(a)
        assert_all(
            "Equal objects should all return the same, consistent hash code",
            [
                (
                    name,
                    lambda value=value, name=name: assertion(
                        f"hash({name}) should equal hash(a)", law="hash code equality"
                    )
                    .that(_hash(value))
                    .is_equal_to(hash_code),
                )
                for name, value in (("a", a), ("b", b), ("c", c))
            ],
            law="hash code equality",
        )
