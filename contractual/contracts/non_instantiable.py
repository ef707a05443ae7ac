"""
Contract for non-instantiable "static utility" classes.

A utility class is a namespace of class-level members that must never be
instantiated. Concrete test classes inherit from NonInstantiableContract and
provide the ``class_under_test`` fixture.

A class satisfying the contract:

    from typing_extensions import final

    @final
    class Strings:
        SEPARATOR = ", "

        def __init__(self):
            raise AssertionError("Strings must not be instantiated")

        @staticmethod
        def join(items):
            return Strings.SEPARATOR.join(items)

Usage:
    class TestStrings(NonInstantiableContract):
        @pytest.fixture
        def class_under_test(self):
            return Strings
"""

from typing import Optional

import pytest

from ..insist import assert_all, assertion, assumption
from ..introspection import (
    ClassDescriptor,
    ConstructorInfo,
    Visibility,
    invoke_constructor,
)
from ..logging import get_logger
from ..utils.exceptions import ConstructorInvocationError, ContractViolation
from .base import Contract

logger = get_logger("contracts.non_instantiable")


def _zero_argument_constructor(descriptor: ClassDescriptor) -> Optional[ConstructorInfo]:
    for constructor in descriptor.constructors:
        if constructor.takes_no_arguments:
            return constructor
    return None


class NonInstantiableContract(Contract):
    """Contract verifying that a class is structurally a non-instantiable namespace."""

    __test__ = False

    # ==================================================================
    # Fixtures (Override in concrete test classes)
    # ==================================================================

    @pytest.fixture
    def class_under_test(self) -> type:
        """Override this fixture to provide the class being tested. Never None.

        Raises:
            NotImplementedError: If not overridden in subclass
        """
        raise NotImplementedError(
            "Concrete test classes must override class_under_test fixture"
        )

    @pytest.fixture
    def descriptor(self, class_under_test) -> ClassDescriptor:
        assumption(
            "This test requires that class_under_test returns a non-None class"
        ).that(class_under_test).is_not_none()
        assumption("This test requires that class_under_test returns a class").that(
            class_under_test
        ).satisfies(lambda value: isinstance(value, type), "being a class")
        return ClassDescriptor.of(class_under_test)

    # ==================================================================
    # Test cases
    # ==================================================================

    def test_class_is_final(self, descriptor: ClassDescriptor):
        """The class cannot be subclassed."""
        assertion(
            f"A non-instantiable class should be final, but {descriptor.name} can be subclassed",
            law="finality",
        ).that(descriptor.is_final).is_true()

    def test_class_has_only_one_constructor(self, descriptor: ClassDescriptor):
        """Exactly one of __new__ / __init__ is declared."""
        constructors = descriptor.constructors
        assertion(
            f"A non-instantiable class should only have 1 constructor, "
            f"found {[str(c) for c in constructors]}",
            law="single constructor",
        ).that(constructors).has_length_of(1)

    def test_constructor_takes_no_arguments(self, descriptor: ClassDescriptor):
        """The constructor takes no arguments besides self/cls."""
        assertion(
            "A non-instantiable class should have a zero argument constructor",
            law="zero argument constructor",
        ).that(_zero_argument_constructor(descriptor)).is_not_none()

    def test_constructor_is_private(self, descriptor: ClassDescriptor):
        """Calling the class normally is refused."""
        assertion(
            f"A non-instantiable class should refuse instantiation, but {descriptor.name}() succeeded",
            law="private constructor",
        ).that(descriptor.constructor_visibility).is_equal_to(Visibility.PRIVATE)

    def test_constructor_raises_assertion_error(self, descriptor: ClassDescriptor):
        """Invoking the constructor through reflection fails with an AssertionError cause."""
        constructor = _zero_argument_constructor(descriptor)
        if constructor is None:
            raise ContractViolation(
                "A non-instantiable class should have a zero argument constructor to invoke",
                law="defensive constructor",
            )

        try:
            created = invoke_constructor(descriptor.cls, constructor)
        except ConstructorInvocationError as exc:
            logger.debug("%s raised %r as expected", constructor, exc.cause)
            assertion(
                "A non-instantiable class should raise an AssertionError if its "
                "constructor is invoked via reflection",
                law="defensive constructor",
            ).that(exc).satisfies(
                lambda error: error.cause_is(AssertionError),
                f"having an AssertionError cause (was {exc.cause.__class__.__name__})",
            )
            return
        raise ContractViolation(
            f"A non-instantiable class should raise an AssertionError if its constructor "
            f"is invoked via reflection, but {constructor} created {created!r}",
            law="defensive constructor",
        )

    def test_class_only_has_static_fields(self, descriptor: ClassDescriptor):
        """Every field declared in the MRO (excluding object) is class-level."""
        assert_all(
            "All fields of a non-instantiable class should be static",
            [
                (
                    field.name,
                    lambda field=field: assertion(
                        f"field [{field}] ({field.kind}) should be static"
                    )
                    .that(field.is_static)
                    .is_true(),
                )
                for field in descriptor.fields
            ],
            law="static fields",
        )

    def test_class_only_has_static_methods(self, descriptor: ClassDescriptor):
        """Every method declared in the MRO (excluding object) is a staticmethod or classmethod."""
        assert_all(
            "All methods of a non-instantiable class should be static",
            [
                (
                    method.name,
                    lambda method=method: assertion(
                        f"method [{method}] ({method.kind.value}) should be static"
                    )
                    .that(method.is_static)
                    .is_true(),
                )
                for method in descriptor.methods
            ],
            law="static methods",
        )
