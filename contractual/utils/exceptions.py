"""
Exception hierarchy shared by the contract suites.

Two kinds of failure matter to users: :class:`AssumptionViolation` (the test
fixture is wrong) and :class:`ContractViolation` (the class under test is
wrong). Only the latter is an ``AssertionError``.
"""

import dataclasses
import enum
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

RECOVERY_SUGGESTION_MAX_LENGTH = 500
FAILURE_SUMMARY_MAX_ITEMS = 50

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


class ErrorSeverity(enum.IntEnum):
    """Severity of a contractual error; decides the level used by ``log_error``."""

    LOW = 1  # fixture problems such as a factory returning None
    MEDIUM = 2  # configuration problems
    HIGH = 3  # the class under test breaks a law
    CRITICAL = 4  # the contract machinery itself failed

    def get_description(self) -> str:
        return _SEVERITY_DESCRIPTIONS[self]


_SEVERITY_DESCRIPTIONS = {
    ErrorSeverity.LOW: "Test fixture does not satisfy a contract precondition",
    ErrorSeverity.MEDIUM: "Contract configuration is invalid",
    ErrorSeverity.HIGH: "Class under test violates a contract",
    ErrorSeverity.CRITICAL: "Contract machinery failure",
}

_SEVERITY_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


@dataclasses.dataclass(frozen=True)
class FailureRecord:
    """Single failure collected by an aggregate check."""

    message: str
    member_name: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ContractualError(Exception):
    """Base exception class for all contractual package errors.

    Every error carries a severity (which picks the log level), an id for
    correlating log lines with test reports, free-form context and an
    optional hint telling the user what to change.
    """

    default_severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        severity: Optional[ErrorSeverity] = None,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        self.severity = self.default_severity if severity is None else severity
        self.error_id = uuid.uuid4().hex[:12]
        self.timestamp = time.time()
        self.recovery_suggestion: Optional[str] = None
        self.error_details: Dict[str, Any] = dict(context)
        self.logged = False

    def get_error_details(self) -> Dict[str, Any]:
        """Summarise the error as a plain dict for logs and reports."""
        summary: Dict[str, Any] = {
            "error_id": self.error_id,
            "exception_type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.name,
            "severity_description": self.severity.get_description(),
            "timestamp": self.timestamp,
            "error_details": self.error_details,
        }
        if self.recovery_suggestion is not None:
            summary["recovery_suggestion"] = self.recovery_suggestion
        return summary

    def log_error(self, logger: Optional[logging.Logger] = None) -> None:
        """Log the error once, at the level matching its severity."""
        if self.logged:
            return
        target = logger or logging.getLogger("contractual.exceptions")
        target.log(
            _SEVERITY_LOG_LEVELS[self.severity],
            "[%s] %s: %s",
            self.error_id,
            type(self).__name__,
            self.message,
        )
        self.logged = True

    def set_recovery_suggestion(self, suggestion: str) -> None:
        """Attach a hint for the user, truncated to a readable length."""
        if len(suggestion) > RECOVERY_SUGGESTION_MAX_LENGTH:
            suggestion = suggestion[: RECOVERY_SUGGESTION_MAX_LENGTH - 3] + "..."
        self.recovery_suggestion = suggestion


class AssumptionViolation(ContractualError):
    """Raised when a caller-supplied fixture does not satisfy a contract precondition.

    This signals that the *test fixture* is wrong (a factory returned None,
    returned the same object twice, or returned values with the wrong
    equality/ranking relationship), as opposed to :class:`ContractViolation`
    which signals that the *class under test* is wrong.
    """

    default_severity = ErrorSeverity.LOW

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.set_recovery_suggestion(
            "Check the factory fixtures of the test class: they must return new, "
            "non-None instances with the documented equality or ranking relationship."
        )


class ContractViolation(ContractualError, AssertionError):
    """Raised when the class under test breaks a semantic contract.

    Subclasses :class:`AssertionError` so that pytest reports it as an
    ordinary test failure with the law named in the message.
    """

    default_severity = ErrorSeverity.HIGH

    def __init__(self, message: str, law: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.law = law


class MultipleContractViolations(ContractViolation):
    """Aggregate contract violation listing every collected failure.

    Aggregate checks run every sub-check before raising, so a single test run
    surfaces all violating members at once.
    """

    def __init__(
        self,
        heading: str,
        failures: Optional[List[FailureRecord]] = None,
        law: Optional[str] = None,
    ):
        self.heading = heading
        self.failures: List[FailureRecord] = list(failures or [])
        super().__init__(self._compose_message(), law=law)

    def add_failure(self, message: str, member_name: Optional[str] = None) -> None:
        """Add a failure and refresh the rendered message.

        Args:
            message (str): Failure description
            member_name (Optional[str]): Name of the offending member, if any
        """
        if not message or not isinstance(message, str):
            raise ValueError("Failure message must be a non-empty string")
        self.failures.append(FailureRecord(message=message, member_name=member_name))
        self.message = self._compose_message()
        self.args = (self.message,)

    @property
    def member_names(self) -> List[str]:
        return [f.member_name for f in self.failures if f.member_name is not None]

    def _compose_message(self) -> str:
        shown = self.failures[:FAILURE_SUMMARY_MAX_ITEMS]
        lines = [f"{self.heading} ({len(self.failures)} failure(s))"]
        lines.extend(f"  - {failure}" for failure in shown)
        hidden = len(self.failures) - len(shown)
        if hidden > 0:
            lines.append(f"  ... and {hidden} more")
        return "\n".join(lines)


class ConstructorInvocationError(ContractualError):
    """Raised when a constructor invoked through reflection raises.

    The original exception is chained as ``__cause__`` and exposed through
    :attr:`cause`, so callers can match on the underlying error kind rather
    than on the wrapper.
    """

    default_severity = ErrorSeverity.LOW

    def __init__(self, message: str, cause: BaseException, owner: Optional[type] = None):
        super().__init__(message, owner=getattr(owner, "__qualname__", None))
        self.cause = cause
        self.owner = owner
        self.__cause__ = cause

    def cause_is(self, error_type: type) -> bool:
        """Return True if the underlying cause is an instance of ``error_type``."""
        return isinstance(self.cause, error_type)


class ConfigurationError(ContractualError, ValueError):
    """Exception class for invalid contract settings.

    Wraps validation failures from the settings model and names the offending
    parameter when one can be identified.
    """

    default_severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        config_parameter: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        valid_options: Optional[List[Any]] = None,
    ):
        super().__init__(message)
        self.config_parameter = config_parameter
        self.parameter_value = parameter_value
        self.valid_options = list(valid_options or [])

        if self.valid_options and self.config_parameter:
            self.set_recovery_suggestion(
                f"Use one of {self.valid_options} for {self.config_parameter}"
            )
        else:
            self.set_recovery_suggestion(
                "Check contract settings in pytest ini options and CONTRACTUAL_* environment variables"
            )
