"""
Fluent assumption and assertion helpers used by the contract suites.

Two tiers of failure are kept apart:

* ``assumption(...)`` checks the *test fixture*. A failed assumption raises
  :class:`~contractual.utils.exceptions.AssumptionViolation`, or skips the
  test when the active settings use ``assumption_policy="skip"``.
* ``assertion(...)`` checks the *class under test*. A failed assertion raises
  :class:`~contractual.utils.exceptions.ContractViolation`, which pytest
  reports as an ordinary failure.

Example:
    >>> assertion("hash codes must match", law="hash code consistency").that(1).is_equal_to(1)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sized, Tuple, Union

import pytest

from .config import get_settings
from .logging import get_logger
from .utils.exceptions import (
    AssumptionViolation,
    ContractViolation,
    MultipleContractViolations,
)

__all__ = [
    "Expectation",
    "Subject",
    "assert_all",
    "assertion",
    "assumption",
]

logger = get_logger("insist")

Check = Union[Callable[[], Any], Tuple[str, Callable[[], Any]]]


class Expectation:
    """Entry point of a fluent check: carries the tier and the message."""

    ASSUMPTION = "assumption"
    ASSERTION = "assertion"

    def __init__(self, kind: str, message: Optional[str] = None, law: Optional[str] = None):
        if kind not in (self.ASSUMPTION, self.ASSERTION):
            raise ValueError(f"Unknown expectation kind: {kind!r}")
        self.kind = kind
        self.message = message
        self.law = law

    def that(self, actual: Any) -> "Subject":
        return Subject(self, actual)

    def fail(self, detail: str) -> None:
        """Log and raise the failure appropriate for this tier."""
        text = f"{self.message}: {detail}" if self.message else detail
        if self.kind == self.ASSUMPTION:
            if get_settings().assumption_policy == "skip":
                pytest.skip(f"Fixture precondition not met: {text}")
            error = AssumptionViolation(text)
        else:
            error = ContractViolation(text, law=self.law)
        error.log_error(logger)
        raise error


class Subject:
    """Value under check. Every check returns ``self`` so checks can be chained."""

    def __init__(self, expectation: Expectation, actual: Any):
        self._expectation = expectation
        self.actual = actual

    def _check(self, passed: bool, detail: str) -> "Subject":
        if not passed:
            self._expectation.fail(detail)
        return self

    def is_not_none(self) -> "Subject":
        return self._check(self.actual is not None, "expected a non-None value")

    def is_true(self) -> "Subject":
        return self._check(self.actual is True, f"expected True but was {self.actual!r}")

    def is_false(self) -> "Subject":
        return self._check(self.actual is False, f"expected False but was {self.actual!r}")

    def is_equal_to(self, other: Any) -> "Subject":
        return self._check(
            bool(self.actual == other),
            f"expected <{self.actual!r}> to be equal to <{other!r}>",
        )

    def is_not_equal_to(self, other: Any) -> "Subject":
        return self._check(
            not bool(self.actual == other),
            f"expected <{self.actual!r}> not to be equal to <{other!r}>",
        )

    def is_not_same_as(self, other: Any) -> "Subject":
        return self._check(
            self.actual is not other,
            f"expected <{self.actual!r}> and <{other!r}> to be different instances",
        )

    def is_zero(self) -> "Subject":
        return self._check(self.actual == 0, f"expected zero but was {self.actual!r}")

    def is_strictly_negative(self) -> "Subject":
        return self._check(
            self.actual < 0, f"expected a strictly negative value but was {self.actual!r}"
        )

    def is_strictly_positive(self) -> "Subject":
        return self._check(
            self.actual > 0, f"expected a strictly positive value but was {self.actual!r}"
        )

    def has_length_of(self, length: int) -> "Subject":
        actual: Sized = self.actual
        return self._check(
            len(actual) == length,
            f"expected length {length} but was {len(actual)}",
        )

    def satisfies(self, predicate: Callable[[Any], bool], description: str = "predicate") -> "Subject":
        return self._check(
            bool(predicate(self.actual)),
            f"expected <{self.actual!r}> to satisfy {description}",
        )


def assumption(message: Optional[str] = None) -> Expectation:
    """Start a fixture precondition check."""
    return Expectation(Expectation.ASSUMPTION, message)


def assertion(message: Optional[str] = None, law: Optional[str] = None) -> Expectation:
    """Start a contract check naming the ``law`` being verified."""
    return Expectation(Expectation.ASSERTION, message, law=law)


def assert_all(heading: str, checks: Iterable[Check], law: Optional[str] = None) -> None:
    """Run every check and report all failures together.

    Each check is either a zero-argument callable or a ``(member_name,
    callable)`` pair. Only ``AssertionError`` is collected; anything else
    propagates immediately.

    Args:
        heading: Summary line of the aggregate failure
        checks: Checks to run
        law: Law named on the aggregate failure

    Raises:
        MultipleContractViolations: If at least one check failed
    """
    violations = MultipleContractViolations(heading, law=law)
    for check in checks:
        member_name = None
        if isinstance(check, tuple):
            member_name, check = check
        try:
            check()
        except AssertionError as exc:
            violations.add_failure(str(exc) or exc.__class__.__name__, member_name=member_name)
    if violations.failures:
        violations.log_error(logger)
        raise violations
