"""Project configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .config_scaffold_builder import DEFAULT_CONFIG_FILENAME
from .profile_resolver import CONFIGURATION_KEYS, apply_overrides, base_configuration
from .runtime_settings import ConfigurationError, ProjectLayout, ProjectSettings, ReportSettings


def load_project_settings(
    config_path: Path | str | None = None,
    *,
    project_root: Path | str = ".",
) -> ProjectSettings:
    """Load the project configuration file, or defaults when none exists.

    An explicit `config_path` must exist. Without one, `test-orchestrator.yaml` in
    the project root is used when present.
    """
    if config_path is None:
        candidate = Path(project_root) / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            return ProjectSettings(path=None, layout=ProjectLayout.for_project(project_root))
        config_path = candidate

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return ProjectSettings(
        path=path.resolve(),
        layout=_parse_paths_section(parsed.get("paths"), base_path),
        profiles=_parse_profiles_section(parsed.get("profiles")),
        reports=_parse_reports_section(parsed.get("reports")),
    )


def _parse_paths_section(value: Any, base_path: Path) -> ProjectLayout:
    defaults = ProjectLayout.for_project(base_path)
    if value is None:
        return defaults
    section = _require_mapping(value, "paths")
    return ProjectLayout(
        project_root=base_path,
        modules_root=_optional_path(section.get("modules_root"), base_path, defaults.modules_root),
        tests_root=_optional_path(section.get("tests_root"), base_path, defaults.tests_root),
        output_dir=_optional_path(section.get("output_dir"), base_path, defaults.output_dir),
    )


def _parse_profiles_section(value: Any) -> dict[str, dict[str, Any]]:
    if value is None:
        return {}
    section = _require_mapping(value, "profiles")
    profiles: dict[str, dict[str, Any]] = {}
    for name, overrides in section.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("Profile names must be non-empty strings.")
        overrides_mapping = _require_mapping(overrides, f"profiles.{name}")
        unknown = sorted(set(overrides_mapping) - CONFIGURATION_KEYS)
        if unknown:
            raise ConfigurationError(f"profiles.{name} has unknown keys: {', '.join(unknown)}")
        # raises ConfigurationError on invalid values
        apply_overrides(base_configuration(), overrides_mapping)
        profiles[name.strip()] = dict(overrides_mapping)
    return profiles


def _parse_reports_section(value: Any) -> ReportSettings:
    if value is None:
        return ReportSettings()
    section = _require_mapping(value, "reports")
    return ReportSettings(
        editor_export=_optional_bool(section.get("editor_export"), "reports.editor_export"),
        workbook=_optional_bool(section.get("workbook"), "reports.workbook"),
    )


def _optional_path(value: Any, base_path: Path, default: Path) -> Path:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError("Configured paths must be non-empty strings.")
    candidate = Path(value.strip())
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value
