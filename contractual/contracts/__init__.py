"""
Reusable contract suites.

Each suite is a pytest base class that is not collected itself. A concrete
test class inherits from one or more suites, overrides their factory
fixtures, and inherits the whole battery of test cases.
"""

from .base import Contract
from .comparable import ComparableContract
from .equality import EqualityContract
from .non_instantiable import NonInstantiableContract
from .testable import TestableContract

__all__ = [
    "Contract",
    "TestableContract",
    "EqualityContract",
    "ComparableContract",
    "NonInstantiableContract",
]
