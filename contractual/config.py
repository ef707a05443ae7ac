"""
Pydantic configuration model for contract suites.

Settings are resolved from defaults, then ``CONTRACTUAL_*`` environment
variables, then pytest ini options and command line flags.

Example:
    >>> from contractual.config import ContractSettings
    >>>
    >>> settings = ContractSettings(consistency_checks=5)
    >>> settings.assumption_policy
    'error'
"""

from __future__ import annotations

import os
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .logging import get_logger
from .utils.exceptions import ConfigurationError

__all__ = [
    "ContractSettings",
    "ENV_PREFIX",
    "INI_OPTIONS",
    "get_settings",
    "load_settings",
    "reset_settings",
    "set_settings",
]

ENV_PREFIX = "CONTRACTUAL_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Settings field -> (ini key, command line destination)
INI_OPTIONS: Dict[str, tuple[str, str]] = {
    "consistency_checks": ("contract_consistency_checks", "contract_consistency_checks"),
    "hash_checks": ("contract_hash_checks", "contract_hash_checks"),
    "assumption_policy": ("contract_assumption_policy", "contract_assumption_policy"),
    "log_level": ("contract_log_level", "contract_log_level"),
}

logger = get_logger("config")


class ContractSettings(BaseModel):
    """Settings shared by every contract suite.

    Attributes:
        consistency_checks: How many times equality is re-evaluated when
            checking consistency
        hash_checks: How many times ``hash()`` is re-evaluated when checking
            hash code stability
        assumption_policy: ``"error"`` raises AssumptionViolation when a
            fixture breaks a precondition, ``"skip"`` skips the test instead
        log_level: Level used when contract logging is routed to loguru;
            None leaves logging untouched

    Example:
        >>> ContractSettings(assumption_policy="skip").assumption_policy
        'skip'
    """

    consistency_checks: int = Field(
        default=3, ge=1, description="Repetitions for equality consistency checks"
    )
    hash_checks: int = Field(
        default=3, ge=1, description="Repetitions for hash code stability checks"
    )
    assumption_policy: Literal["error", "skip"] = Field(
        default="error",
        description="'error' fails on broken fixture preconditions, 'skip' skips the test",
    )
    log_level: Optional[str] = Field(
        default=None, description="Loguru level for contract logging (None: disabled)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalise the level name and reject unknown levels."""
        if v is None:
            return v
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {v!r}")
        return level

    model_config = ConfigDict(validate_assignment=True, extra="forbid", frozen=True)


def _from_environ(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field_name in ContractSettings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is not None and raw != "":
            values[field_name] = raw
    return values


def _from_pytest_config(config: Any) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field_name, (ini_key, dest) in INI_OPTIONS.items():
        cli_value = config.getoption(dest, default=None)
        if cli_value is not None:
            values[field_name] = cli_value
            continue
        try:
            ini_value = config.getini(ini_key)
        except ValueError:
            # ini key not registered (plugin not loaded)
            continue
        if ini_value not in (None, ""):
            values[field_name] = ini_value
    return values


def load_settings(
    config: Any = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> ContractSettings:
    """Resolve contract settings from the environment and pytest configuration.

    Args:
        config: A ``pytest.Config`` (or compatible object) or None
        environ: Mapping used instead of ``os.environ``
        **overrides: Explicit values that win over every other source

    Returns:
        Validated ContractSettings

    Raises:
        ConfigurationError: If any resolved value fails validation
    """
    values: Dict[str, Any] = {}
    values.update(_from_environ(os.environ if environ is None else environ))
    if config is not None:
        values.update(_from_pytest_config(config))
    values.update(overrides)

    try:
        settings = ContractSettings(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        parameter = str(first["loc"][0]) if first.get("loc") else None
        valid_options = None
        if parameter == "assumption_policy":
            valid_options = ["error", "skip"]
        elif parameter == "log_level":
            valid_options = list(LOG_LEVELS)
        raise ConfigurationError(
            f"Invalid contract settings: {first['msg']}",
            config_parameter=parameter,
            parameter_value=values.get(parameter) if parameter else None,
            valid_options=valid_options,
        ) from exc

    logger.debug("Resolved contract settings: %s", settings.model_dump())
    return settings


_active_settings: Optional[ContractSettings] = None


def get_settings() -> ContractSettings:
    """Return the process-wide settings, loading them from the environment on first use."""
    global _active_settings
    if _active_settings is None:
        _active_settings = load_settings()
    return _active_settings


def set_settings(settings: ContractSettings) -> None:
    global _active_settings
    if not isinstance(settings, ContractSettings):
        raise TypeError("settings must be a ContractSettings instance")
    _active_settings = settings


def reset_settings() -> None:
    global _active_settings
    _active_settings = None
