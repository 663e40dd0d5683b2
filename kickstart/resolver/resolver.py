"""Dependency resolution: ChoiceSchema -> PackageManifest.

Every configuration axis contributes zero or more ``Contribution`` records
(bucket + package names).  ``resolve`` folds the ordered contributions of all
axes into a single immutable :class:`PackageManifest`, looking each package
up in the :class:`~kickstart.resolver.catalog.VersionCatalog` it was given.

The fold is pure: the same schema and catalog always produce an equal
manifest, and a package is never listed twice (the first contribution to
name it decides its bucket).
"""

from __future__ import annotations

from collections.abc import Callable
from functools import reduce
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from kickstart.choices import (
    ApiClient,
    ChoiceSchema,
    Deployment,
    Framework,
    Routing,
    StateManagement,
    Styling,
    Testing,
)
from kickstart.resolver.catalog import VersionCatalog, default_catalog


DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"


# ---------------------------------------------------------------------------
# Manifest model
# ---------------------------------------------------------------------------

class PackageManifest(BaseModel):
    """Runtime and development dependency buckets of a generated project."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    def bucket(self, name: str) -> dict[str, str]:
        """Return the bucket called *name* (``dependencies``/``devDependencies``)."""
        if name == DEPENDENCIES:
            return self.dependencies
        if name == DEV_DEPENDENCIES:
            return self.dev_dependencies
        raise ValueError(f"Unknown dependency bucket: {name!r}")

    def bucket_of(self, package: str) -> Optional[str]:
        """Return which bucket holds *package*, or ``None``."""
        if package in self.dependencies:
            return DEPENDENCIES
        if package in self.dev_dependencies:
            return DEV_DEPENDENCIES
        return None

    def __contains__(self, package: object) -> bool:
        return package in self.dependencies or package in self.dev_dependencies

    def with_package(self, bucket: str, package: str, version: str) -> "PackageManifest":
        """Return a new manifest with *package* added, unless already present."""
        if package in self:
            return self
        updated = dict(self.bucket(bucket))
        updated[package] = version
        field = "dependencies" if bucket == DEPENDENCIES else "dev_dependencies"
        return self.model_copy(update={field: updated})

    def sorted(self) -> "PackageManifest":
        """Return a copy with both buckets ordered by package name."""
        return PackageManifest(
            dependencies=dict(sorted(self.dependencies.items())),
            dev_dependencies=dict(sorted(self.dev_dependencies.items())),
        )

    def as_package_json(self) -> dict[str, dict[str, str]]:
        return {
            DEPENDENCIES: dict(self.dependencies),
            DEV_DEPENDENCIES: dict(self.dev_dependencies),
        }


class Contribution(NamedTuple):
    """Packages one axis adds to one bucket."""

    bucket: str
    packages: tuple[str, ...]


# ---------------------------------------------------------------------------
# Axis contributions
# ---------------------------------------------------------------------------

_TESTING_LIBRARY = (
    "@testing-library/react",
    "@testing-library/jest-dom",
    "@testing-library/user-event",
)


def _core(choices: ChoiceSchema) -> list[Contribution]:
    return [Contribution(DEPENDENCIES, ("react", "react-dom"))]


def _framework(choices: ChoiceSchema) -> list[Contribution]:
    if choices.framework is Framework.VITE:
        return [Contribution(DEV_DEPENDENCIES, ("vite", "@vitejs/plugin-react"))]
    return [Contribution(DEPENDENCIES, ("next",))]


def _language(choices: ChoiceSchema) -> list[Contribution]:
    if not choices.typescript:
        return []
    if choices.is_nextjs:
        # Next.js type-checks during `next build`, so the types ship as dependencies.
        return [Contribution(
            DEPENDENCIES,
            ("typescript", "@types/node", "@types/react", "@types/react-dom"),
        )]
    return [Contribution(DEV_DEPENDENCIES, ("typescript", "@types/react", "@types/react-dom"))]


def _linting(choices: ChoiceSchema) -> list[Contribution]:
    if not choices.linting:
        return []
    if choices.is_nextjs:
        packages = ("eslint", "eslint-config-next")
    else:
        packages = ("eslint", "eslint-plugin-react", "eslint-plugin-react-hooks")
    packages += ("prettier", "eslint-plugin-prettier", "eslint-config-prettier")
    if choices.typescript:
        packages += ("@typescript-eslint/eslint-plugin", "@typescript-eslint/parser")
    return [Contribution(DEV_DEPENDENCIES, packages)]


def _styling(choices: ChoiceSchema) -> list[Contribution]:
    if choices.styling is Styling.TAILWIND:
        bucket = DEPENDENCIES if choices.is_nextjs else DEV_DEPENDENCIES
        return [Contribution(bucket, ("tailwindcss", "postcss", "autoprefixer"))]
    if choices.styling is Styling.STYLED_COMPONENTS:
        if choices.is_nextjs:
            return [Contribution(
                DEPENDENCIES, ("styled-components", "babel-plugin-styled-components")
            )]
        return [Contribution(DEPENDENCIES, ("styled-components",))]
    return []


def _routing(choices: ChoiceSchema) -> list[Contribution]:
    if choices.is_vite and choices.routing is Routing.REACT_ROUTER:
        return [Contribution(DEPENDENCIES, ("react-router-dom",))]
    return []


_STATE_PACKAGES: dict[StateManagement, tuple[str, ...]] = {
    StateManagement.REDUX: ("@reduxjs/toolkit", "react-redux"),
    StateManagement.ZUSTAND: ("zustand",),
    StateManagement.NONE: (),
}


def _state(choices: ChoiceSchema) -> list[Contribution]:
    packages = _STATE_PACKAGES[choices.state_management]
    return [Contribution(DEPENDENCIES, packages)] if packages else []


_API_PACKAGES: dict[ApiClient, tuple[str, ...]] = {
    ApiClient.AXIOS_REACT_QUERY: ("axios", "@tanstack/react-query"),
    ApiClient.AXIOS_ONLY: ("axios",),
    ApiClient.FETCH_REACT_QUERY: ("@tanstack/react-query",),
    ApiClient.FETCH_ONLY: (),
    ApiClient.NONE: (),
}


def _api(choices: ChoiceSchema) -> list[Contribution]:
    packages = _API_PACKAGES[choices.api]
    return [Contribution(DEPENDENCIES, packages)] if packages else []


def _testing(choices: ChoiceSchema) -> list[Contribution]:
    if choices.testing is Testing.VITEST:
        return [Contribution(
            DEV_DEPENDENCIES,
            ("vitest", "@vitest/ui", "jsdom", "@vitejs/plugin-react") + _TESTING_LIBRARY,
        )]
    if choices.testing is Testing.JEST:
        contributions = [Contribution(
            DEV_DEPENDENCIES, ("jest", "jest-environment-jsdom") + _TESTING_LIBRARY
        )]
        if choices.is_vite:
            babel = ("babel-jest", "@babel/preset-env", "@babel/preset-react", "identity-obj-proxy")
            if choices.typescript:
                babel += ("@babel/preset-typescript",)
            contributions.append(Contribution(DEV_DEPENDENCIES, babel))
        if choices.typescript:
            contributions.append(Contribution(DEV_DEPENDENCIES, ("@types/jest",)))
        return contributions
    return []


_DEPLOYMENT_PACKAGES: dict[Deployment, tuple[str, ...]] = {
    Deployment.VERCEL: ("vercel",),
    Deployment.NETLIFY: ("netlify-cli",),
    Deployment.NONE: (),
}


def _deployment(choices: ChoiceSchema) -> list[Contribution]:
    packages = _DEPLOYMENT_PACKAGES[choices.deployment]
    return [Contribution(DEV_DEPENDENCIES, packages)] if packages else []


# Fold order.  Earlier axes claim a package's bucket first.
AXES: tuple[tuple[str, Callable[[ChoiceSchema], list[Contribution]]], ...] = (
    ("core", _core),
    ("framework", _framework),
    ("language", _language),
    ("linting", _linting),
    ("styling", _styling),
    ("routing", _routing),
    ("state", _state),
    ("api", _api),
    ("testing", _testing),
    ("deployment", _deployment),
)


def contributions(choices: ChoiceSchema) -> list[tuple[str, Contribution]]:
    """Return every ``(axis, contribution)`` for *choices*, in fold order."""
    return [
        (axis, contribution)
        for axis, contribute in AXES
        for contribution in contribute(choices)
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve(
    choices: ChoiceSchema,
    catalog: VersionCatalog | None = None,
) -> PackageManifest:
    """Resolve *choices* into a complete, duplicate-free package manifest.

    Args:
        choices: A validated choice schema.
        catalog: Version catalog to pin packages from.  Defaults to the
            bundled ``versions.json``.

    Returns:
        A fresh ``PackageManifest`` with both buckets sorted by name.

    Raises:
        CatalogError: If a contributed package has no catalog entry.
    """
    catalog = catalog or default_catalog()

    def _apply(manifest: PackageManifest, item: tuple[str, Contribution]) -> PackageManifest:
        _, contribution = item
        for package in contribution.packages:
            manifest = manifest.with_package(
                contribution.bucket, package, catalog.version(package)
            )
        return manifest

    return reduce(_apply, contributions(choices), PackageManifest()).sorted()


def required_packages(choices: ChoiceSchema) -> dict[str, set[str]]:
    """Return the expected package names per bucket, without versions."""
    expected: dict[str, set[str]] = {DEPENDENCIES: set(), DEV_DEPENDENCIES: set()}
    seen: set[str] = set()
    for _, contribution in contributions(choices):
        for package in contribution.packages:
            if package not in seen:
                expected[contribution.bucket].add(package)
                seen.add(package)
    return expected


def check_compatibility(choices: ChoiceSchema) -> list[str]:
    """Return soft warnings for suboptimal but valid combinations.

    Never raises; an empty list means nothing worth mentioning.
    """
    warnings: list[str] = []

    if choices.typescript and not choices.linting:
        warnings.append(
            "TypeScript without ESLint: typed lint rules catch issues the compiler does not."
        )
    if choices.testing is Testing.JEST and choices.is_vite:
        warnings.append(
            "Jest with Vite needs a babel-jest transform; Vitest reuses the Vite pipeline."
        )
        if choices.typescript:
            warnings.append(
                "Jest with Vite and TypeScript compiles tests through @babel/preset-typescript, "
                "which strips types without type-checking them."
            )
    if choices.testing is Testing.VITEST and choices.is_nextjs:
        warnings.append(
            "Vitest with Next.js: Jest has built-in Next.js integration via next/jest."
        )
    if choices.deployment is Deployment.NETLIFY and choices.is_nextjs:
        warnings.append(
            "Netlify with Next.js deploys a static export; server features such as API routes "
            "are not available."
        )
    if choices.api in (ApiClient.AXIOS_REACT_QUERY, ApiClient.FETCH_REACT_QUERY):
        if choices.state_management is not StateManagement.NONE:
            warnings.append(
                f"React Query with {choices.state_management.value}: keep server data in "
                "React Query and use the store for client state only."
            )

    return warnings

