"""Version catalog for generated package manifests.

Dependency versions are data, not code: they live in ``versions.json`` next
to this module, grouped by category, and are loaded into a
:class:`VersionCatalog` that the resolver receives explicitly.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


_DEFAULT_CATALOG_PATH = Path(__file__).parent / "versions.json"


class CatalogError(KeyError):
    """Raised when a package has no entry in the version catalog."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown package"


class VersionCatalog(BaseModel):
    """Immutable mapping of npm package name -> semver range.

    ``groups`` keeps the category layout of the source file (``core``,
    ``styling``, ``testing`` ...) for display; lookups go through the flat
    ``packages`` index built at load time.
    """

    model_config = ConfigDict(frozen=True)

    groups: dict[str, dict[str, str]] = Field(default_factory=dict)
    source: str = Field(default="", description="Where the catalog was loaded from")

    @field_validator("groups")
    @classmethod
    def _reject_duplicates(cls, value: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
        seen: dict[str, str] = {}
        for group, packages in value.items():
            for name in packages:
                if name in seen:
                    raise ValueError(
                        f"package '{name}' listed in both '{seen[name]}' and '{group}'"
                    )
                seen[name] = group
        return value

    @property
    def packages(self) -> dict[str, str]:
        """Flat ``{package: version}`` view across all groups."""
        flat: dict[str, str] = {}
        for packages in self.groups.values():
            flat.update(packages)
        return flat

    def version(self, package: str) -> str:
        """Return the semver range pinned for *package*.

        Raises:
            CatalogError: If the package is not in the catalog.
        """
        for packages in self.groups.values():
            if package in packages:
                return packages[package]
        raise CatalogError(f"No version pinned for package '{package}' in {self.source or 'catalog'}")

    def __contains__(self, package: object) -> bool:
        return any(package in packages for packages in self.groups.values())

    def __len__(self) -> int:
        return sum(len(packages) for packages in self.groups.values())

    # -- Loading -----------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path | None = None) -> "VersionCatalog":
        """Load a catalog from a JSON file of ``{group: {package: version}}``.

        Args:
            path: Catalog file.  Defaults to the bundled ``versions.json``.

        Returns:
            A validated ``VersionCatalog`` instance.
        """
        file_path = Path(path) if path is not None else _DEFAULT_CATALOG_PATH
        raw = json.loads(file_path.read_text(encoding="utf-8"))
        return cls(groups=raw, source=str(file_path))


@lru_cache(maxsize=1)
def default_catalog() -> VersionCatalog:
    """Return the bundled catalog, loaded once per process."""
    return VersionCatalog.load()
