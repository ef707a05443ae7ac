"""Public package initializer exposing the contract suites and their helpers."""

from __future__ import annotations

from typing import Dict

from .config import ContractSettings, get_settings, load_settings
from .contracts import (
    ComparableContract,
    Contract,
    EqualityContract,
    NonInstantiableContract,
    TestableContract,
)
from .insist import assert_all, assertion, assumption
from .introspection import ClassDescriptor, invoke_constructor, is_final
from .utils.exceptions import (
    AssumptionViolation,
    ConfigurationError,
    ConstructorInvocationError,
    ContractualError,
    ContractViolation,
    MultipleContractViolations,
)

PACKAGE_NAME = "contractual"
PACKAGE_VERSION = "1.0.0"


def get_package_info() -> Dict[str, object]:
    """Return high-level package metadata for tooling and packaging scripts."""

    return {
        "package_name": PACKAGE_NAME,
        "package_version": PACKAGE_VERSION,
        "contracts": [
            TestableContract.__name__,
            EqualityContract.__name__,
            ComparableContract.__name__,
            NonInstantiableContract.__name__,
        ],
        "default_settings": ContractSettings().model_dump(),
    }


__all__ = [
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "Contract",
    "TestableContract",
    "EqualityContract",
    "ComparableContract",
    "NonInstantiableContract",
    "ContractSettings",
    "get_settings",
    "load_settings",
    "assumption",
    "assertion",
    "assert_all",
    "ClassDescriptor",
    "invoke_constructor",
    "is_final",
    "ContractualError",
    "AssumptionViolation",
    "ContractViolation",
    "MultipleContractViolations",
    "ConstructorInvocationError",
    "ConfigurationError",
    "get_package_info",
]

__version__ = PACKAGE_VERSION
