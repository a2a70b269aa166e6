"""Single-module test scaffold writer."""

from __future__ import annotations

from datetime import datetime

from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor

from .archetype_classifier import AUTO_TEMPLATE, classify_module, parse_template_kind
from .module_analysis import Archetype, analyze_module
from .template_rendering import (
    PlaceholderRenderer,
    TemplateRenderer,
    build_substitutions,
    load_template,
)


class ScaffoldError(Exception):
    """Raised when a scaffold cannot be generated."""


def generate_test(
    descriptor: ModuleDescriptor,
    template_kind: Archetype | str = AUTO_TEMPLATE,
    *,
    overwrite: bool = False,
    renderer: TemplateRenderer | None = None,
    generated_at: datetime | None = None,
) -> bool:
    """Render a starter test file for a module at its co-located test path.

    Returns:
      True when a file was written, False when one already exists and
      `overwrite` was not requested. An existing file is never modified then.

    Raises:
      ScaffoldError: If the template kind is unknown or writing fails.
    """
    target = descriptor.colocated_test_file
    if target.exists() and not overwrite:
        return False

    try:
        explicit = parse_template_kind(template_kind)
    except ValueError as exc:
        raise ScaffoldError(str(exc)) from exc

    analysis = analyze_module(descriptor)
    archetype = explicit or classify_module(analysis)
    content = (renderer or PlaceholderRenderer()).render(
        load_template(archetype),
        build_substitutions(analysis, archetype, generated_at=generated_at),
    )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(f"Failed to write test scaffold {target}: {exc}") from exc
    return True
