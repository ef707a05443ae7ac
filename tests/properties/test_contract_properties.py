"""
Property Tests: Contract Suites

Uses Hypothesis to drive the contract methods with generated fixtures.
Well-behaved classes must pass for every generated input.
"""

from hypothesis import given, settings

from contractual.config import ContractSettings
from contractual.contracts import ComparableContract, EqualityContract
from tests.samples import Foo
from tests.strategies import distinct_foo_values, version_orderings

EQUALITY = EqualityContract()
ORDERING = ComparableContract()
SETTINGS = ContractSettings()


class TestEqualityProperties:
    """Every law of the equality contract holds for Foo over arbitrary text."""

    @given(values=distinct_foo_values())
    @settings(max_examples=100)
    def test_equal_objects_laws(self, values):
        value, _ = values
        instance = Foo(value)
        supplier = lambda: Foo(value)  # noqa: E731
        EQUALITY.test_reflexivity(instance)
        EQUALITY.test_symmetry_of_equal_objects(instance, supplier)
        EQUALITY.test_transitivity_of_equal_objects(instance, supplier)
        EQUALITY.test_consistency_of_equal_objects(instance, supplier, SETTINGS)
        EQUALITY.test_equal_objects_have_equal_hash_codes(instance, supplier)

    @given(values=distinct_foo_values())
    @settings(max_examples=100)
    def test_non_equal_objects_laws(self, values):
        value, other = values
        instance = Foo(value)
        supplier = lambda: Foo(value)  # noqa: E731
        EQUALITY.test_symmetry_of_non_equal_objects(instance, Foo(other))
        EQUALITY.test_transitivity_of_non_equal_objects(instance, supplier, Foo(other))
        EQUALITY.test_consistency_of_non_equal_objects(instance, Foo(other), SETTINGS)
        EQUALITY.test_not_equal_to_none(instance)
        EQUALITY.test_not_equal_to_unrelated_type(instance)


class TestOrderingProperties:
    """Version honours the ordering contract for every rank."""

    @given(versions=version_orderings())
    @settings(max_examples=200)
    def test_ordering_laws(self, versions):
        instance, comparable, smaller = versions
        ORDERING.test_compare_to_none_raises(instance)
        ORDERING.test_compare_to_self_is_zero(instance)
        ORDERING.test_compare_to_comparable_is_zero(instance, comparable)
        ORDERING.test_smaller_compared_to_instance_is_negative(instance, smaller)
        ORDERING.test_instance_compared_to_smaller_is_positive(instance, smaller)

    @given(versions=version_orderings())
    def test_compare_is_antisymmetric(self, versions):
        instance, _, smaller = versions
        assert ORDERING.compare(instance, smaller) == -ORDERING.compare(smaller, instance)
