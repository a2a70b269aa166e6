"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "test-orchestrator.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Project configuration for unified-test-orchestrator.
# Every key is optional. Relative paths resolve against this file's directory.

paths:
  # Directory whose immediate subdirectories are modules (each with __init__.py).
  modules_root: "modules"
  # Shared test tree: unit/modules/<Name>/ and integration/test_*<Name>*.py.
  tests_root: "tests"
  # Root for reports/, logs/ and coverage/ artifacts.
  output_dir: "tests/results"

# Extra named profiles. Only the listed keys override the base configuration.
# Built-in profiles: Development, CI, Production, Debug.
profiles:
  # Nightly:
  #   verbosity: "Detailed"        # Minimal | Normal | Detailed | Verbose
  #   timeout_minutes: 90
  #   retry_count: 1
  #   mock_level: "Standard"       # None | Low | Standard | High
  #   parallel_jobs: 4
  #   enable_coverage: true
  #   coverage_threshold: 85
  #   enable_performance_metrics: true
  #   max_memory_usage_mb: 2048

reports:
  # Write reports/editor-test-results.json for editor integrations.
  editor_export: false
  # Write an .xlsx results workbook next to the JSON/HTML reports.
  workbook: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML project configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder project configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
