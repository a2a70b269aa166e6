"""Test scaffold generation exports."""

from .archetype_classifier import AUTO_TEMPLATE, CORE_MODULES, classify_module, parse_template_kind
from .bulk_scaffolding import ScaffoldOutcome, generate_missing_tests, modules_without_tests
from .module_analysis import Archetype, ModuleAnalysis, analyze_module
from .scaffold_writer import ScaffoldError, generate_test
from .template_rendering import (
    UNRESOLVED_MARKER,
    PlaceholderRenderer,
    TemplateRenderer,
    build_substitutions,
    load_template,
)

__all__ = [
    "AUTO_TEMPLATE",
    "CORE_MODULES",
    "UNRESOLVED_MARKER",
    "Archetype",
    "ModuleAnalysis",
    "PlaceholderRenderer",
    "ScaffoldError",
    "ScaffoldOutcome",
    "TemplateRenderer",
    "analyze_module",
    "build_substitutions",
    "classify_module",
    "generate_missing_tests",
    "generate_test",
    "load_template",
    "modules_without_tests",
    "parse_template_kind",
]
