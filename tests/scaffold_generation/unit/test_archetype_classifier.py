"""Module analysis and archetype classification tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from unified_test_orchestrator.module_catalog import describe_module
from unified_test_orchestrator.scaffold_generation import (
    Archetype,
    ModuleAnalysis,
    analyze_module,
    classify_module,
    parse_template_kind,
)
from unified_test_orchestrator.scaffold_generation.archetype_classifier import (
    normalize_unit_name,
)


def _analysis(name: str, *units: str) -> ModuleAnalysis:
    return ModuleAnalysis(
        module_name=name,
        description=f"{name} module",
        version="0.0.0",
        exported_units=units,
        dependencies=(),
        uses_public_private_layout=False,
    )


def _module_dir(tmp_path: Path, name: str) -> Path:
    module_dir = tmp_path / "modules" / name
    module_dir.mkdir(parents=True)
    (module_dir / "__init__.py").write_text("", encoding="utf-8")
    return module_dir


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Start-LabVM", "start_lab_vm"),
        ("startLabVm", "start_lab_vm"),
        ("stop_lab", "stop_lab"),
        ("Test-ProviderConnection", "test_provider_connection"),
    ],
)
def test_unit_names_normalize_to_snake_case(raw: str, expected: str) -> None:
    assert normalize_unit_name(raw) == expected


def test_name_suffix_wins_over_exported_verbs() -> None:
    assert classify_module(_analysis("LabManager", "connect_db")) is Archetype.MANAGER
    assert classify_module(_analysis("CloudProvider", "start_vm")) is Archetype.PROVIDER


def test_core_allow_list() -> None:
    assert classify_module(_analysis("Logging")) is Archetype.CORE
    assert classify_module(_analysis("ProgressTracking", "start_progress")) is Archetype.CORE


def test_exported_verb_majority_decides() -> None:
    manager_like = _analysis("Lab", "Start-LabVM", "Stop-LabVM", "Read-Config")
    provider_like = _analysis("Storage", "connect_store", "read_blob", "start_sync")

    assert classify_module(manager_like) is Archetype.MANAGER
    assert classify_module(provider_like) is Archetype.PROVIDER


def test_no_signal_or_tie_is_utility() -> None:
    assert classify_module(_analysis("Helpers", "format_table")) is Archetype.UTILITY
    assert classify_module(_analysis("Mixed", "start_vm", "connect_db")) is Archetype.UTILITY
    assert classify_module(_analysis("Empty")) is Archetype.UTILITY


def test_template_kind_parsing() -> None:
    assert parse_template_kind("auto") is None
    assert parse_template_kind("provider") is Archetype.PROVIDER
    assert parse_template_kind(Archetype.CORE) is Archetype.CORE
    with pytest.raises(ValueError, match="Unknown template kind"):
        parse_template_kind("Widget")


def test_analysis_prefers_explicit_manifest_exports(tmp_path: Path) -> None:
    module_dir = _module_dir(tmp_path, "LabManager")
    (module_dir / "module.yaml").write_text(
        "version: 2.1.0\ndescription: Lab control\nexports: [Start-LabVM]\n"
        "dependencies: [Logging]\n",
        encoding="utf-8",
    )
    (module_dir / "public").mkdir()
    (module_dir / "public" / "stop_lab.py").write_text("", encoding="utf-8")

    analysis = analyze_module(describe_module(module_dir, tests_root=tmp_path / "tests"))

    assert analysis.exported_units == ("Start-LabVM",)
    assert analysis.version == "2.1.0"
    assert analysis.description == "Lab control"
    assert analysis.dependencies == ("Logging",)
    assert analysis.uses_public_private_layout


def test_analysis_falls_back_to_public_folder_on_wildcard(tmp_path: Path) -> None:
    module_dir = _module_dir(tmp_path, "Storage")
    (module_dir / "module.yaml").write_text("exports: '*'\n", encoding="utf-8")
    (module_dir / "public").mkdir()
    for name in ("read_blob.py", "connect_store.py", "_internal.py"):
        (module_dir / "public" / name).write_text("", encoding="utf-8")

    analysis = analyze_module(describe_module(module_dir, tests_root=tmp_path / "tests"))

    assert analysis.exported_units == ("connect_store", "read_blob")
    assert analysis.version == "0.0.0"
    assert analysis.description == "Storage module"


def test_analysis_without_manifest_or_public_folder(tmp_path: Path) -> None:
    module_dir = _module_dir(tmp_path, "Helpers")

    analysis = analyze_module(describe_module(module_dir, tests_root=tmp_path / "tests"))

    assert analysis.exported_units == ()
    assert not analysis.uses_public_private_layout
