"""
Utility package for contractual providing the exception hierarchy shared by
every contract suite.
"""

from .exceptions import (
    AssumptionViolation,
    ConfigurationError,
    ConstructorInvocationError,
    ContractualError,
    ContractViolation,
    ErrorSeverity,
    FailureRecord,
    MultipleContractViolations,
)

__all__ = [
    "ContractualError",
    "AssumptionViolation",
    "ContractViolation",
    "MultipleContractViolations",
    "ConstructorInvocationError",
    "ConfigurationError",
    "ErrorSeverity",
    "FailureRecord",
]
