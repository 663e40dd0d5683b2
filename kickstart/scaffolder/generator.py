"""Main scaffolding orchestrator.

Takes a validated ``ChoiceSchema`` and a project name and generates a
complete, ready-to-install React project directory.  Everything (manifest,
package.json, tooling configs, application sources) is built and checked in
memory first; files are only written once the whole plan is consistent.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from kickstart.choices import ChoiceSchema, Editor, PackageManager
from kickstart.config import Config
from kickstart.resolver import VersionCatalog, check_compatibility, resolve
from kickstart.scaffolder.configs import build_config_files, check_configuration
from kickstart.scaffolder.content import ContentGenerator
from kickstart.scaffolder.manifest import build_package_json, dump_json
from kickstart.scaffolder.templates import TemplateRenderer, write_file


class GenerationError(Exception):
    """Raised when a project cannot be generated (bad name, occupied target)."""


# npm package name rules: lowercase, url-safe, at most 214 characters.
_PROJECT_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
_MAX_NAME_LENGTH = 214


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Outcome of a generation run."""

    project_path: Path
    files: list[str] = Field(default_factory=list, description="Written paths, project-relative")
    warnings: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list, description="Commands for the user to run")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ChoiceSchema`` and project name, generates:
    - package.json with the resolved dependency manifest and scripts
    - framework, TypeScript, Tailwind, test, lint and deployment configs
    - application sources for the chosen framework, router and styling,
      plus the store, API client and example test the choices enable
    - .gitignore and README.md
    """

    def __init__(
        self,
        choices: ChoiceSchema,
        project_name: str,
        config: Config | None = None,
        *,
        catalog: VersionCatalog | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.choices = choices
        self.project_name = project_name
        self.config = config or Config()
        self.catalog = catalog or self.config.catalog()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def plan(self) -> dict[str, str]:
        """Build every file body without touching the filesystem.

        Returns:
            ``{relative_path: body}`` for the whole project, package.json
            first.

        Raises:
            GenerationError: If the project name is not a valid npm name.
            CatalogError: If a resolved package has no pinned version.
            ConfigIntegrityError: If the config set has a dangling reference.
        """
        validate_project_name(self.project_name)

        manifest = resolve(self.choices, self.catalog)
        package_json = build_package_json(self.choices, manifest, self.project_name)
        configs = build_config_files(self.choices)
        sources = ContentGenerator(self.choices, self.project_name, self.renderer).source_files()

        files: dict[str, str] = {"package.json": dump_json(package_json)}
        files.update(configs.files)
        files.update(sources)

        context = self._project_context(package_json["scripts"])
        files[".gitignore"] = self.renderer.render("project/gitignore.j2", context)
        files["README.md"] = self.renderer.render("project/README.md.j2", context)
        return files

    def warnings(self) -> list[str]:
        """Compatibility and configuration warnings for the current choices."""
        return check_compatibility(self.choices) + check_configuration(self.choices)

    async def generate(self, output_dir: str | Path | None = None) -> GenerationResult:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.  Defaults to ``config.output_dir``.  A subdirectory
                named after the project is created inside it.

        Returns:
            A ``GenerationResult`` describing what was written.

        Raises:
            GenerationError: If the target directory exists and is not empty,
                or the project name is invalid.
        """
        parent = Path(output_dir) if output_dir is not None else self.config.output_dir
        project_root = parent / self.project_name

        files = self.plan()

        if await asyncio.to_thread(_is_occupied, project_root):
            raise GenerationError(f"Target directory is not empty: {project_root}")
        await asyncio.to_thread(project_root.mkdir, parents=True, exist_ok=True)

        await asyncio.gather(
            *(write_file(project_root / rel_path, body) for rel_path, body in files.items())
        )

        return GenerationResult(
            project_path=project_root,
            files=list(files),
            warnings=self.warnings(),
            next_steps=next_steps(self.choices, self.project_name),
        )

    # -- Internal helpers --------------------------------------------------

    def _project_context(self, scripts: dict[str, str]) -> dict[str, Any]:
        choices = self.choices
        return {
            "project_name": self.project_name,
            "framework": choices.framework.value,
            "next_routing": choices.next_routing.value if choices.next_routing else "",
            "typescript": choices.typescript,
            "testing": choices.testing.value,
            "deployment": choices.deployment.value,
            "summary": choices.describe(),
            "scripts": scripts,
            "install_command": install_command(choices),
            "run_prefix": run_prefix(choices),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def validate_project_name(name: str) -> str:
    """Return *name* if it is a valid npm package name.

    Raises:
        GenerationError: Otherwise.
    """
    if not name:
        raise GenerationError("Project name must not be empty")
    if len(name) > _MAX_NAME_LENGTH:
        raise GenerationError(f"Project name is longer than {_MAX_NAME_LENGTH} characters")
    if not _PROJECT_NAME_RE.match(name):
        raise GenerationError(
            f"Invalid project name {name!r}: use lowercase letters, digits, '-', '_' or '.', "
            "starting with a letter or digit"
        )
    return name


def install_command(choices: ChoiceSchema) -> str:
    return "yarn" if choices.package_manager is PackageManager.YARN else "npm install"


def run_prefix(choices: ChoiceSchema) -> str:
    return "yarn" if choices.package_manager is PackageManager.YARN else "npm run"


def next_steps(choices: ChoiceSchema, project_name: str) -> list[str]:
    """Commands the user runs after generation.  Nothing here is executed."""
    steps = [f"cd {project_name}"]
    if choices.init_git:
        steps.append('git init && git add -A && git commit -m "Initial commit"')
    steps.append(install_command(choices))
    if choices.open_editor:
        steps.append("cursor ." if choices.editor is Editor.CURSOR else "code .")
    steps.append(f"{run_prefix(choices)} dev")
    return steps


def _is_occupied(path: Path) -> bool:
    if not path.exists():
        return False
    if not path.is_dir():
        return True
    return any(path.iterdir())
