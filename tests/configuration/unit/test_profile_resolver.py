"""Profile resolution tests."""

from __future__ import annotations

import pytest
from unified_test_orchestrator.configuration import (
    BUILTIN_PROFILES,
    ConfigurationError,
    MockLevel,
    RunConfiguration,
    Verbosity,
    available_profiles,
    base_configuration,
    resolve_run_configuration,
)
from unified_test_orchestrator.configuration.profile_resolver import apply_overrides
from unified_test_orchestrator.run_logging import LogLevel


class _RecordingSink:
    def __init__(self) -> None:
        self.messages: list[tuple[LogLevel, str]] = []

    def log(self, level: LogLevel, message: str) -> None:
        self.messages.append((level, message))


def test_base_configuration_defaults() -> None:
    base = base_configuration()

    assert base.verbosity is Verbosity.NORMAL
    assert base.timeout_minutes == 30
    assert base.retry_count == 2
    assert base.mock_level is MockLevel.STANDARD
    assert 1 <= base.parallel_jobs <= 4
    assert base.enable_coverage is False
    assert base.coverage_threshold == 80
    assert base.enable_performance_metrics is True
    assert base.max_memory_usage_mb == 1024


def test_profile_overrides_only_listed_keys() -> None:
    base = base_configuration()
    resolved = resolve_run_configuration("CI")

    overridden = set(BUILTIN_PROFILES["CI"])
    for key, value in base.as_dict().items():
        if key not in overridden:
            assert resolved.as_dict()[key] == value
    assert resolved.enable_coverage is True
    assert resolved.timeout_minutes == BUILTIN_PROFILES["CI"]["timeout_minutes"]


def test_profile_lookup_is_case_insensitive() -> None:
    assert resolve_run_configuration("debug") == resolve_run_configuration("Debug")
    assert resolve_run_configuration("Debug").parallel_jobs == 1


def test_unknown_profile_falls_back_to_base_with_warning() -> None:
    sink = _RecordingSink()

    resolved = resolve_run_configuration("Nightly", log_sink=sink)

    assert resolved == base_configuration()
    assert sink.messages == [
        (LogLevel.WARN, "Unknown test profile 'Nightly'; using base configuration.")
    ]


def test_project_profiles_extend_and_override_builtins() -> None:
    extra = {"Nightly": {"timeout_minutes": 90}, "CI": {"retry_count": 0}}

    assert resolve_run_configuration("Nightly", extra_profiles=extra).timeout_minutes == 90
    assert resolve_run_configuration("CI", extra_profiles=extra).retry_count == 0
    assert "Nightly" in available_profiles(extra)
    assert set(BUILTIN_PROFILES) <= set(available_profiles())


def test_unknown_override_key_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="colour"):
        apply_overrides(base_configuration(), {"colour": "blue"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeout_minutes": 0},
        {"retry_count": -1},
        {"parallel_jobs": 0},
        {"coverage_threshold": 101},
        {"verbosity": "Loud"},
    ],
)
def test_invalid_values_raise_configuration_error(overrides) -> None:
    with pytest.raises(ConfigurationError):
        RunConfiguration(**overrides)


def test_enum_values_are_coerced_from_strings() -> None:
    configuration = RunConfiguration(verbosity="Verbose", mock_level="None")

    assert configuration.verbosity is Verbosity.VERBOSE
    assert configuration.mock_level is MockLevel.NONE
