"""Dependency resolution for generated projects.

Exports the version catalog and the ``resolve`` reducer that turns a
:class:`~kickstart.choices.ChoiceSchema` into a package manifest.
"""

from kickstart.resolver.catalog import CatalogError, VersionCatalog, default_catalog
from kickstart.resolver.resolver import (
    DEPENDENCIES,
    DEV_DEPENDENCIES,
    PackageManifest,
    check_compatibility,
    required_packages,
    resolve,
)

__all__ = [
    "CatalogError",
    "DEPENDENCIES",
    "DEV_DEPENDENCIES",
    "PackageManifest",
    "VersionCatalog",
    "check_compatibility",
    "default_catalog",
    "required_packages",
    "resolve",
]
