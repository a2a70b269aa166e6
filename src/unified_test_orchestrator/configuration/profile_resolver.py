"""Named-profile configuration resolver."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

from unified_test_orchestrator.run_logging import LogLevel, LogSink, emit, resolve_log_sink

from .runtime_settings import ConfigurationError, RunConfiguration

BUILTIN_PROFILES: Mapping[str, Mapping[str, Any]] = {
    "Development": {
        "verbosity": "Detailed",
        "timeout_minutes": 15,
        "mock_level": "High",
        "retry_count": 1,
    },
    "CI": {
        "verbosity": "Normal",
        "timeout_minutes": 45,
        "retry_count": 3,
        "enable_coverage": True,
    },
    "Production": {
        "verbosity": "Normal",
        "timeout_minutes": 60,
        "mock_level": "Low",
        "retry_count": 1,
        "enable_coverage": True,
        "coverage_threshold": 90,
    },
    "Debug": {
        "verbosity": "Verbose",
        "timeout_minutes": 120,
        "mock_level": "None",
        "retry_count": 0,
        "parallel_jobs": 1,
    },
}

CONFIGURATION_KEYS = frozenset(item.name for item in fields(RunConfiguration))


def base_configuration() -> RunConfiguration:
    """Return the fixed base configuration every profile overlays."""
    return RunConfiguration()


def resolve_run_configuration(
    profile_name: str | None,
    *,
    extra_profiles: Mapping[str, Mapping[str, Any]] | None = None,
    log_sink: LogSink | None = None,
) -> RunConfiguration:
    """Overlay the named profile's overrides onto the base configuration.

    Unknown profile names resolve to the unmodified base configuration.
    """
    base = base_configuration()
    overrides = find_profile(profile_name, extra_profiles=extra_profiles)
    if overrides is None:
        emit(
            resolve_log_sink(log_sink),
            LogLevel.WARN,
            f"Unknown test profile '{profile_name}'; using base configuration.",
        )
        return base
    return apply_overrides(base, overrides)


def find_profile(
    profile_name: str | None,
    *,
    extra_profiles: Mapping[str, Mapping[str, Any]] | None = None,
) -> Mapping[str, Any] | None:
    """Look up a profile by case-insensitive name; project profiles win over built-ins."""
    if not profile_name:
        return None
    table = {**BUILTIN_PROFILES, **(extra_profiles or {})}
    wanted = profile_name.strip().lower()
    for name, overrides in table.items():
        if name.lower() == wanted:
            return overrides
    return None


def available_profiles(extra_profiles: Mapping[str, Mapping[str, Any]] | None = None) -> list[str]:
    return list({**BUILTIN_PROFILES, **(extra_profiles or {})})


def apply_overrides(base: RunConfiguration, overrides: Mapping[str, Any]) -> RunConfiguration:
    """Replace only the keys present in the override mapping."""
    unknown = sorted(set(overrides) - CONFIGURATION_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys in profile: {', '.join(unknown)}")
    return replace(base, **dict(overrides))
