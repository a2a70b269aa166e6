"""Scaffold template loading and placeholder rendering."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from importlib import resources
from typing import Protocol

from .module_analysis import Archetype, ModuleAnalysis

UNRESOLVED_MARKER = "customize-this"
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Z0-9_]+)\s*\}\}")
TEMPLATE_SUFFIX = ".py.tmpl"


class TemplateRenderer(Protocol):  # pylint: disable=too-few-public-methods
    """Renders template text against substitution values."""

    def render(self, template_text: str, values: Mapping[str, str]) -> str: ...


class PlaceholderRenderer:  # pylint: disable=too-few-public-methods
    """Replaces `{{TOKEN}}` placeholders; unknown tokens become the customize marker."""

    def __init__(self, unresolved_marker: str = UNRESOLVED_MARKER) -> None:
        self._unresolved_marker = unresolved_marker

    def render(self, template_text: str, values: Mapping[str, str]) -> str:
        def substitute(match: re.Match[str]) -> str:
            return values.get(match.group(1), self._unresolved_marker)

        return PLACEHOLDER_PATTERN.sub(substitute, template_text)


def load_template(archetype: Archetype) -> str:
    """Read the bundled template text for an archetype."""
    template_name = f"{archetype.value.lower()}{TEMPLATE_SUFFIX}"
    return (
        resources.files(__package__)
        .joinpath("templates", template_name)
        .read_text(encoding="utf-8")
    )


def build_substitutions(
    analysis: ModuleAnalysis,
    archetype: Archetype,
    *,
    generated_at: datetime | None = None,
) -> dict[str, str]:
    """Compute placeholder values shared by every template plus archetype extras."""
    timestamp = (generated_at or datetime.now(UTC)).strftime("%Y-%m-%d %H:%M:%S UTC")
    values = {
        "MODULE_NAME": analysis.module_name,
        "DESCRIPTION": _docstring_safe(analysis.description),
        "VERSION": analysis.version,
        "ARCHETYPE": archetype.value,
        "EXPORTED_UNITS": _python_tuple_literal(analysis.exported_units),
        "DEPENDENCIES": _python_tuple_literal(analysis.dependencies),
        "GENERATED_AT": timestamp,
    }
    if archetype is Archetype.MANAGER:
        values["MANAGED_RESOURCE"] = _strip_suffix(analysis.module_name, "Manager")
    elif archetype is Archetype.PROVIDER:
        values["PROVIDER_KIND"] = _strip_suffix(analysis.module_name, "Provider")
    elif archetype is Archetype.CORE:
        values["CORE_SERVICE"] = analysis.module_name
    return values


def _python_tuple_literal(items: tuple[str, ...]) -> str:
    return repr(tuple(items))


def _docstring_safe(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def _strip_suffix(name: str, suffix: str) -> str:
    stripped = name[: -len(suffix)] if name.endswith(suffix) else name
    return stripped or name
