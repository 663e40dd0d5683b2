"""package.json construction.

Folds the project identity, the npm scripts contributed by each enabled
feature and a resolved :class:`~kickstart.resolver.PackageManifest` into the
``package.json`` mapping.  Key order is fixed so the serialised file is
byte-for-byte stable for a given choice set.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from kickstart.choices import ChoiceSchema, Deployment, PackageManager, Testing
from kickstart.resolver import DEPENDENCIES, DEV_DEPENDENCIES, PackageManifest


# ---------------------------------------------------------------------------
# Script groups
# ---------------------------------------------------------------------------

def framework_scripts(choices: ChoiceSchema) -> dict[str, str]:
    if choices.is_vite:
        return {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        }
    return {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
    }


def linting_scripts(choices: ChoiceSchema) -> dict[str, str]:
    if not choices.linting:
        return {}
    extensions = ".js,.jsx,.ts,.tsx" if choices.typescript else ".js,.jsx"
    return {
        "lint": f"eslint . --ext {extensions}",
        "format": "prettier --write .",
    }


def testing_scripts(choices: ChoiceSchema) -> dict[str, str]:
    if choices.testing is Testing.VITEST:
        return {
            "test": "vitest",
            "test:ui": "vitest --ui",
            "test:run": "vitest run",
        }
    if choices.testing is Testing.JEST:
        return {
            "test": "jest",
            "test:watch": "jest --watch",
            "test:coverage": "jest --coverage",
        }
    return {}


def deployment_scripts(choices: ChoiceSchema) -> dict[str, str]:
    if choices.deployment is Deployment.VERCEL:
        return {"deploy": "vercel --prod"}
    if choices.deployment is Deployment.NETLIFY:
        return {"deploy": f"{build_command(choices)} && netlify deploy --prod --dir={publish_dir(choices)}"}
    return {}


SCRIPT_GROUPS = (framework_scripts, linting_scripts, testing_scripts, deployment_scripts)


def build_command(choices: ChoiceSchema) -> str:
    """Return the build invocation for the chosen package manager."""
    if choices.package_manager is PackageManager.YARN:
        return "yarn build"
    return "npm run build"


def publish_dir(choices: ChoiceSchema) -> str:
    """Directory holding the production build (``dist`` or the Next.js static export)."""
    return "dist" if choices.is_vite else "out"


def build_scripts(
    choices: ChoiceSchema,
    overrides: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge the script groups in precedence order.

    A later group only adds names no earlier group defined; *overrides*
    replace or extend the result unconditionally.
    """
    scripts: dict[str, str] = {}
    for group in SCRIPT_GROUPS:
        for name, command in group(choices).items():
            scripts.setdefault(name, command)
    if overrides:
        scripts.update(overrides)
    return scripts


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------

def build_package_json(
    choices: ChoiceSchema,
    manifest: PackageManifest,
    project_name: str,
    script_overrides: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build the ``package.json`` mapping for a project.

    Args:
        choices: Validated choice schema.
        manifest: Resolved dependency manifest for the same choices.
        project_name: npm package name (already validated).
        script_overrides: Caller-supplied scripts that win over every
            generated script.

    Returns:
        An insertion-ordered dict: ``name``, ``version``, ``private``,
        ``type`` (Vite only), ``scripts``, ``dependencies``,
        ``devDependencies``.
    """
    package: dict[str, Any] = {
        "name": project_name,
        "version": "0.0.0" if choices.is_vite else "0.1.0",
        "private": True,
    }
    if choices.is_vite:
        package["type"] = "module"
    package["scripts"] = build_scripts(choices, script_overrides)
    package[DEPENDENCIES] = dict(sorted(manifest.dependencies.items()))
    package[DEV_DEPENDENCIES] = dict(sorted(manifest.dev_dependencies.items()))
    return package


def dump_json(data: Mapping[str, Any]) -> str:
    """Serialise JSON the way every generated file is written: 2-space indent, trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
