"""Module catalog domain exports."""

from .catalog_builder import build_catalog, describe_module
from .descriptor_models import ModuleDescriptor, ModuleTestStrategy
from .manifest_reader import CatalogError, ModuleManifest, read_manifest

__all__ = [
    "ModuleDescriptor",
    "ModuleTestStrategy",
    "ModuleManifest",
    "CatalogError",
    "build_catalog",
    "describe_module",
    "read_manifest",
]
