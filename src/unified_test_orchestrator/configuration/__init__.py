"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import load_project_settings
from .profile_resolver import (
    BUILTIN_PROFILES,
    available_profiles,
    base_configuration,
    resolve_run_configuration,
)
from .runtime_settings import (
    ConfigurationError,
    MockLevel,
    ProjectLayout,
    ProjectSettings,
    ReportSettings,
    RunConfiguration,
    Verbosity,
)

__all__ = [
    "RunConfiguration",
    "Verbosity",
    "MockLevel",
    "ProjectLayout",
    "ProjectSettings",
    "ReportSettings",
    "ConfigurationError",
    "BUILTIN_PROFILES",
    "available_profiles",
    "base_configuration",
    "resolve_run_configuration",
    "load_project_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
