"""Tests for ContractSettings and settings resolution."""

import pytest
from pydantic import ValidationError

from contractual.config import (
    ContractSettings,
    get_settings,
    load_settings,
    reset_settings,
    set_settings,
)
from contractual.utils.exceptions import ConfigurationError


class StubConfig:
    """Minimal stand-in for pytest.Config exposing getoption/getini."""

    def __init__(self, options=None, ini=None, registered=True):
        self.options = options or {}
        self.ini = ini or {}
        self.registered = registered

    def getoption(self, name, default=None):
        return self.options.get(name, default)

    def getini(self, name):
        if not self.registered:
            raise ValueError(f"unknown configuration value: {name!r}")
        return self.ini.get(name)


class TestContractSettings:
    def test_defaults(self):
        settings = ContractSettings()
        assert settings.consistency_checks == 3
        assert settings.hash_checks == 3
        assert settings.assumption_policy == "error"
        assert settings.log_level is None

    def test_log_level_is_normalised(self):
        assert ContractSettings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "values",
        [
            {"consistency_checks": 0},
            {"hash_checks": -1},
            {"assumption_policy": "ignore"},
            {"log_level": "VERBOSE"},
            {"unknown": 1},
        ],
    )
    def test_invalid_values_are_rejected(self, values):
        with pytest.raises(ValidationError):
            ContractSettings(**values)

    def test_settings_are_frozen(self):
        settings = ContractSettings()
        with pytest.raises(ValidationError):
            settings.hash_checks = 10


class TestLoadSettings:
    def test_empty_sources_give_defaults(self):
        assert load_settings(environ={}) == ContractSettings()

    def test_environment_variables(self):
        settings = load_settings(
            environ={
                "CONTRACTUAL_CONSISTENCY_CHECKS": "7",
                "CONTRACTUAL_ASSUMPTION_POLICY": "skip",
                "CONTRACTUAL_HASH_CHECKS": "",
            }
        )
        assert settings.consistency_checks == 7
        assert settings.assumption_policy == "skip"
        assert settings.hash_checks == 3

    def test_ini_overrides_environment(self):
        config = StubConfig(ini={"contract_consistency_checks": "4"})
        settings = load_settings(
            config, environ={"CONTRACTUAL_CONSISTENCY_CHECKS": "7"}
        )
        assert settings.consistency_checks == 4

    def test_command_line_overrides_ini(self):
        config = StubConfig(
            options={"contract_hash_checks": "9"},
            ini={"contract_hash_checks": "4"},
        )
        assert load_settings(config, environ={}).hash_checks == 9

    def test_explicit_overrides_win(self):
        config = StubConfig(options={"contract_hash_checks": "9"})
        assert load_settings(config, environ={}, hash_checks=2).hash_checks == 2

    def test_unregistered_ini_keys_are_ignored(self):
        assert load_settings(StubConfig(registered=False), environ={}) == ContractSettings()

    def test_invalid_policy_names_valid_options(self):
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings(environ={"CONTRACTUAL_ASSUMPTION_POLICY": "ignore"})
        error = excinfo.value
        assert error.config_parameter == "assumption_policy"
        assert error.parameter_value == "ignore"
        assert error.valid_options == ["error", "skip"]
        assert isinstance(error.__cause__, ValidationError)

    def test_invalid_count_is_a_value_error(self):
        with pytest.raises(ValueError, match="Invalid contract settings"):
            load_settings(environ={}, consistency_checks=0)


class TestActiveSettings:
    @pytest.fixture(autouse=True)
    def restore(self):
        previous = get_settings()
        yield
        set_settings(previous)

    def test_set_and_get(self):
        settings = ContractSettings(hash_checks=8)
        set_settings(settings)
        assert get_settings() is settings

    def test_set_rejects_other_types(self):
        with pytest.raises(TypeError):
            set_settings({"hash_checks": 8})

    def test_reset_reloads_from_environment(self, monkeypatch):
        monkeypatch.setenv("CONTRACTUAL_HASH_CHECKS", "6")
        reset_settings()
        assert get_settings().hash_checks == 6
