"""Configuration domain entities."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

MAX_DEFAULT_PARALLEL_JOBS = 4


class ConfigurationError(Exception):
    """Raised when configuration values are invalid."""


class Verbosity(str, Enum):
    """Runner output verbosity."""

    MINIMAL = "Minimal"
    NORMAL = "Normal"
    DETAILED = "Detailed"
    VERBOSE = "Verbose"


class MockLevel(str, Enum):
    """How aggressively suites are expected to mock collaborators."""

    NONE = "None"
    LOW = "Low"
    STANDARD = "Standard"
    HIGH = "High"


def default_parallel_jobs() -> int:
    """Return min(4, logical CPU count)."""
    return max(1, min(MAX_DEFAULT_PARALLEL_JOBS, os.cpu_count() or 1))


@dataclass(frozen=True)
class RunConfiguration:  # pylint: disable=too-many-instance-attributes
    """Immutable per-run settings resolved from a profile."""

    verbosity: Verbosity = Verbosity.NORMAL
    timeout_minutes: int = 30
    retry_count: int = 2
    mock_level: MockLevel = MockLevel.STANDARD
    parallel_jobs: int = field(default_factory=default_parallel_jobs)
    enable_coverage: bool = False
    coverage_threshold: float = 80
    enable_performance_metrics: bool = True
    max_memory_usage_mb: int = 1024

    def __post_init__(self) -> None:
        _require_int_at_least(self.timeout_minutes, 1, "timeout_minutes")
        _require_int_at_least(self.retry_count, 0, "retry_count")
        _require_int_at_least(self.parallel_jobs, 1, "parallel_jobs")
        _require_int_at_least(self.max_memory_usage_mb, 1, "max_memory_usage_mb")
        if isinstance(self.coverage_threshold, bool) or not isinstance(
            self.coverage_threshold, int | float
        ):
            raise ConfigurationError("coverage_threshold must be a number.")
        if not 0 <= self.coverage_threshold <= 100:
            raise ConfigurationError("coverage_threshold must be between 0 and 100.")
        object.__setattr__(self, "verbosity", _coerce_enum(Verbosity, self.verbosity))
        object.__setattr__(self, "mock_level", _coerce_enum(MockLevel, self.mock_level))

    def as_dict(self) -> dict[str, Any]:
        return {
            "verbosity": self.verbosity.value,
            "timeout_minutes": self.timeout_minutes,
            "retry_count": self.retry_count,
            "mock_level": self.mock_level.value,
            "parallel_jobs": self.parallel_jobs,
            "enable_coverage": self.enable_coverage,
            "coverage_threshold": self.coverage_threshold,
            "enable_performance_metrics": self.enable_performance_metrics,
            "max_memory_usage_mb": self.max_memory_usage_mb,
        }


@dataclass(frozen=True)
class ProjectLayout:
    """Filesystem locations the orchestrator works against."""

    project_root: Path
    modules_root: Path
    tests_root: Path
    output_dir: Path

    @classmethod
    def for_project(cls, project_root: Path | str) -> ProjectLayout:
        root = Path(project_root).resolve()
        return cls(
            project_root=root,
            modules_root=root / "modules",
            tests_root=root / "tests",
            output_dir=root / "tests" / "results",
        )

    @property
    def integration_tests_dir(self) -> Path:
        return self.tests_root / "integration"


@dataclass(frozen=True)
class ReportSettings:
    """Optional report artifacts."""

    editor_export: bool = False
    workbook: bool = False


@dataclass(frozen=True)
class ProjectSettings:
    """Top-level project configuration aggregate."""

    path: Path | None
    layout: ProjectLayout
    profiles: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    reports: ReportSettings = field(default_factory=ReportSettings)


def _require_int_at_least(value: Any, minimum: int, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < minimum:
        raise ConfigurationError(f"{field_name} must be at least {minimum}.")


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Enum:
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if isinstance(value, str) and value.strip().lower() == str(member.value).lower():
            return member
    choices = ", ".join(str(member.value) for member in enum_cls)
    raise ConfigurationError(f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {choices}.")
