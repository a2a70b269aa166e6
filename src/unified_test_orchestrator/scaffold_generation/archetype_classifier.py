"""Archetype classification heuristics."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .module_analysis import Archetype, ModuleAnalysis

AUTO_TEMPLATE = "auto"

CORE_MODULES = frozenset(
    {
        "Logging",
        "TestingFramework",
        "ParallelExecution",
        "ModuleCommunication",
        "ConfigurationCore",
        "ProgressTracking",
    }
)

MANAGER_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        r"^(start|stop|restart)_",
        r"^(enable|disable)_",
        r"^(register|unregister)_",
        r"^get_\w*status$",
        r"^set_\w*config(uration)?$",
    )
)

PROVIDER_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        r"^(connect|disconnect)_",
        r"^test_\w*connection$",
        r"^invoke_\w*provider$",
        r"^(read|write|fetch|publish)_",
    )
)


def normalize_unit_name(name: str) -> str:
    """Normalize `Start-LabVM`, `startLabVm` and `start_lab_vm` to snake case."""
    spaced = re.sub(r"[-\s]+", "_", name.strip())
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", spaced)
    return re.sub(r"_+", "_", snake).lower()


def count_matches(unit_names: Iterable[str], patterns: Iterable[re.Pattern[str]]) -> int:
    compiled = tuple(patterns)
    return sum(
        1
        for name in unit_names
        if any(pattern.search(normalize_unit_name(name)) for pattern in compiled)
    )


def classify_module(analysis: ModuleAnalysis) -> Archetype:
    """Pick the archetype from name suffix, the core allow-list, then exported verbs."""
    name = analysis.module_name
    if name.endswith("Manager"):
        return Archetype.MANAGER
    if name.endswith("Provider"):
        return Archetype.PROVIDER
    if name in CORE_MODULES:
        return Archetype.CORE

    manager_votes = count_matches(analysis.exported_units, MANAGER_PATTERNS)
    provider_votes = count_matches(analysis.exported_units, PROVIDER_PATTERNS)
    if manager_votes > provider_votes:
        return Archetype.MANAGER
    if provider_votes > manager_votes:
        return Archetype.PROVIDER
    return Archetype.UTILITY


def parse_template_kind(value: Archetype | str | None) -> Archetype | None:
    """Return an explicit archetype, or None when classification should decide."""
    if value is None or isinstance(value, Archetype):
        return value
    wanted = value.strip().lower()
    if wanted in ("", AUTO_TEMPLATE):
        return None
    for member in Archetype:
        if member.value.lower() == wanted:
            return member
    choices = ", ".join([AUTO_TEMPLATE, *(member.value for member in Archetype)])
    raise ValueError(f"Unknown template kind '{value}'. Expected one of: {choices}.")
