"""
Tests for EqualityContract.

TestFooEquality is a concrete adopter and must pass the whole battery.
The remaining classes drive single contract methods against broken samples
and broken fixtures.
"""

import pytest

from contractual.contracts import EqualityContract
from contractual.utils.exceptions import (
    AssumptionViolation,
    ContractViolation,
    MultipleContractViolations,
)
from tests.samples import (
    Asymmetric,
    CloseEnough,
    DriftingHash,
    EqualsEverything,
    EqualsNone,
    FlipFlop,
    Foo,
    IdentityHash,
    Money,
    NotReflexive,
    PrefixEqual,
    SubclassableFoo,
    Unhashable,
)


class TestFooEquality(EqualityContract):
    """Foo("hello") / Foo("hello") / Foo("world") satisfies the equality contract."""

    @pytest.fixture
    def instance(self):
        return Foo("hello")

    @pytest.fixture
    def equal_instance_supplier(self):
        return lambda: Foo("hello")

    @pytest.fixture
    def non_equal_instance(self):
        return Foo("world")


def test_foo_scenario_relationships():
    a, b, c = Foo("hello"), Foo("hello"), Foo("world")
    assert a == b
    assert a != c
    assert hash(a) == hash(b)
    assert a != None  # noqa: E711
    assert a != object()


@pytest.fixture
def suite():
    return EqualityContract()


class TestEqualityViolations:
    """Each broken sample fails exactly the law it breaks."""

    def test_subclassable_class_fails_finality(self, suite):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_class_is_final(SubclassableFoo("x"))
        assert excinfo.value.law == "finality"
        assert "SubclassableFoo" in str(excinfo.value)

    def test_final_class_passes_finality(self, suite):
        suite.test_class_is_final(Foo("x"))

    def test_class_requiring_subclass_keywords_is_not_final(self, suite):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_class_is_final(Money(1))
        assert excinfo.value.law == "finality"

    def test_equal_to_none_fails(self, suite):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_not_equal_to_none(EqualsNone())
        assert excinfo.value.law == "null inequality"

    def test_equal_to_unrelated_type_fails(self, suite):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_not_equal_to_unrelated_type(EqualsEverything())
        assert excinfo.value.law == "cross-type inequality"

    def test_not_reflexive_fails(self, suite):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_reflexivity(NotReflexive())
        assert excinfo.value.law == "reflexivity"

    def test_asymmetric_equality_fails(self, suite):
        a = Asymmetric("x")
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_symmetry_of_equal_objects(a, lambda: Asymmetric("x"))
        assert excinfo.value.law == "symmetry"

    def test_one_sided_inequality_fails(self, suite):
        # PrefixEqual("ab") != PrefixEqual("a") but PrefixEqual("a") == PrefixEqual("ab")
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_symmetry_of_non_equal_objects(PrefixEqual("ab"), PrefixEqual("a"))
        assert excinfo.value.law == "symmetry"

    def test_non_transitive_equality_fails(self, suite):
        supplied = iter([CloseEnough(1), CloseEnough(2)])
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_transitivity_of_equal_objects(CloseEnough(0), lambda: next(supplied))
        assert excinfo.value.law == "transitivity"

    def test_non_transitive_inequality_fails(self, suite):
        # 1 == 0 and 0 != 2, yet 1 == 2
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_transitivity_of_non_equal_objects(
                CloseEnough(1), lambda: CloseEnough(0), CloseEnough(2)
            )
        assert excinfo.value.law == "transitivity"

    def test_inconsistent_equality_fails(self, suite, default_settings):
        a = FlipFlop("x")
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_consistency_of_equal_objects(
                a, lambda: FlipFlop("x"), default_settings
            )
        assert excinfo.value.law == "consistency"
        assert "attempt 1" in str(excinfo.value)

    def test_drifting_hash_fails(self, suite, default_settings):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_hash_code_consistency(DriftingHash("x"), default_settings)
        assert excinfo.value.law == "hash code consistency"

    def test_unhashable_class_fails(self, suite, default_settings):
        with pytest.raises(ContractViolation) as excinfo:
            suite.test_hash_code_consistency(Unhashable("x"), default_settings)
        assert excinfo.value.law == "hashability"
        assert isinstance(excinfo.value.__cause__, TypeError)

    def test_identity_hash_reports_every_mismatch(self, suite):
        with pytest.raises(MultipleContractViolations) as excinfo:
            suite.test_equal_objects_have_equal_hash_codes(
                IdentityHash("x"), lambda: IdentityHash("x")
            )
        violation = excinfo.value
        assert violation.law == "hash code equality"
        assert violation.member_names == ["b", "c"]
        assert "2 failure(s)" in str(violation)


class TestEqualityFixtureAssumptions:
    """Broken fixtures are reported as AssumptionViolation, not ContractViolation."""

    def test_none_instance(self, suite):
        with pytest.raises(AssumptionViolation, match="'a' be non-None"):
            suite.test_reflexivity(None)

    def test_supplier_returning_none(self, suite):
        with pytest.raises(AssumptionViolation, match="'b' be non-None"):
            suite.test_symmetry_of_equal_objects(Foo("x"), lambda: None)

    def test_supplier_returning_same_object(self, suite):
        a = Foo("x")
        with pytest.raises(AssumptionViolation, match="different instances"):
            suite.test_symmetry_of_equal_objects(a, lambda: a)

    def test_supplier_returning_shared_object(self, suite):
        shared = Foo("x")
        with pytest.raises(AssumptionViolation, match="'b' and 'c' be different instances"):
            suite.test_transitivity_of_equal_objects(Foo("x"), lambda: shared)

    def test_supplier_returning_non_equal_value(self, suite):
        with pytest.raises(AssumptionViolation, match="'a' be equal to 'b'"):
            suite.test_symmetry_of_equal_objects(Foo("x"), lambda: Foo("y"))

    def test_non_equal_instance_that_is_equal(self, suite):
        with pytest.raises(AssumptionViolation, match="'a' not be equal to 'b'"):
            suite.test_symmetry_of_non_equal_objects(Foo("x"), Foo("x"))

    def test_mixed_transitivity_requires_b_not_equal_c(self, suite):
        with pytest.raises(AssumptionViolation, match="'b' not be equal to 'c'"):
            suite.test_transitivity_of_non_equal_objects(
                Foo("x"), lambda: Foo("x"), Foo("x")
            )

    def test_skip_policy_skips_instead(self, suite, use_settings):
        use_settings(assumption_policy="skip")
        with pytest.raises(pytest.skip.Exception, match="Fixture precondition not met"):
            suite.test_reflexivity(None)

    def test_assumption_violation_is_not_an_assertion_error(self):
        assert not issubclass(AssumptionViolation, AssertionError)
        assert issubclass(ContractViolation, AssertionError)
