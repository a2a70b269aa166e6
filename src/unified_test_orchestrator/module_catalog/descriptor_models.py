"""Module catalog entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

ENTRY_SCRIPT_NAME = "__init__.py"
MANIFEST_FILENAME = "module.yaml"
COLOCATED_TEST_DIRNAME = "tests"
CENTRALIZED_TEST_SUBDIR = ("unit", "modules")


class ModuleTestStrategy(str, Enum):
    """Where a module keeps its tests."""

    DISTRIBUTED = "Distributed"
    CENTRALIZED = "Centralized"
    NONE = "None"


def colocated_test_file(module_path: Path, module_name: str) -> Path:
    """Return the fixed co-located test file path for a module."""
    return module_path / COLOCATED_TEST_DIRNAME / f"test_{module_name}.py"


def centralized_test_dir(tests_root: Path, module_name: str) -> Path:
    """Return the centralized test directory keyed by module name."""
    return tests_root.joinpath(*CENTRALIZED_TEST_SUBDIR, module_name)


@dataclass(frozen=True)
class ModuleDescriptor:  # pylint: disable=too-many-instance-attributes
    """Identity and test-discovery result for one module."""

    name: str
    path: Path
    script_path: Path
    manifest_path: Path | None
    colocated_test_file: Path
    centralized_test_dir: Path
    has_colocated_tests: bool = field(default=False)
    has_centralized_tests: bool = field(default=False)

    @property
    def test_strategy(self) -> ModuleTestStrategy:
        if self.has_colocated_tests:
            return ModuleTestStrategy.DISTRIBUTED
        if self.has_centralized_tests:
            return ModuleTestStrategy.CENTRALIZED
        return ModuleTestStrategy.NONE

    @property
    def test_path(self) -> Path:
        """Path to execute, or the scaffold target when the module has no tests."""
        if self.test_strategy is ModuleTestStrategy.CENTRALIZED:
            return self.centralized_test_dir
        return self.colocated_test_file
