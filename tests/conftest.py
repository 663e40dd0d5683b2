"""Shared pytest fixtures for the kickstart test suite.

Provides reusable fixtures for:
- Representative choice sets (Vite, Next.js App Router, Next.js Pages Router)
- The bundled version catalog and a template renderer
- A minimal catalog file on disk
- Temporary output directories

Also defines ScriptedPrompter, the wizard prompter the tests drive with a
fixed list of answers (import it with ``from conftest import ...``).
"""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest

from kickstart.choices import ChoiceDraft, ChoiceSchema
from kickstart.config import Config
from kickstart.resolver import VersionCatalog, default_catalog
from kickstart.scaffolder.templates import TemplateRenderer
from kickstart.wizard import BACK, Choice, WizardStep


# ---------------------------------------------------------------------------
# Choice sets
# ---------------------------------------------------------------------------

@pytest.fixture
def vite_answers() -> dict[str, Any]:
    """A full Vite answer set, keyed like the wizard answers."""
    return {
        "packageManager": "npm",
        "framework": "vite",
        "routing": "react-router",
        "typescript": True,
        "linting": True,
        "styling": "tailwind",
        "stateManagement": "zustand",
        "api": "axios-react-query",
        "testing": "vitest",
        "deployment": "netlify",
        "initGit": True,
        "openEditor": False,
    }


@pytest.fixture
def vite_choices(vite_answers: dict[str, Any]) -> ChoiceSchema:
    return ChoiceSchema.from_answers(vite_answers)


@pytest.fixture
def next_app_choices() -> ChoiceSchema:
    """Next.js App Router, TypeScript, styled-components, Jest, Vercel."""
    return ChoiceSchema(
        packageManager="yarn",
        framework="nextjs",
        nextRouting="app",
        typescript=True,
        linting=True,
        styling="styled-components",
        stateManagement="redux",
        api="fetch-only",
        testing="jest",
        deployment="vercel",
        initGit=False,
        openEditor=True,
        editor="cursor",
    )


@pytest.fixture
def next_pages_choices() -> ChoiceSchema:
    """Next.js Pages Router, JavaScript, plain CSS, no extras."""
    return ChoiceSchema(
        framework="nextjs",
        nextRouting="pages",
        styling="css",
    )


@pytest.fixture
def minimal_vite_choices() -> ChoiceSchema:
    """Vite with every optional axis switched off."""
    return ChoiceSchema(framework="vite")


# ---------------------------------------------------------------------------
# Catalog / rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog() -> VersionCatalog:
    return default_catalog()


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def small_catalog_file(tmp_path: Path) -> Path:
    """A catalog file covering only the packages of a bare Vite project."""
    path = tmp_path / "versions.json"
    path.write_text(
        json.dumps({
            "core": {"react": "18.0.0", "react-dom": "18.0.0"},
            "framework": {"vite": "5.0.0", "@vitejs/plugin-react": "4.0.0"},
        }),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects (auto-cleanup)."""
    out = tmp_path / "output"
    out.mkdir()
    yield out


@pytest.fixture
def config(output_dir: Path) -> Config:
    return Config(output_dir=output_dir)


# ---------------------------------------------------------------------------
# Scripted wizard answers
# ---------------------------------------------------------------------------

# Marker for ScriptedPrompter: accept whatever the step pre-selects.
DEFAULT = object()


class ScriptedPrompter:
    """Replays *selections* in order.

    Each entry is an option value, ``BACK`` or ``DEFAULT``.  Running out of
    selections raises ``EOFError``, the same signal a closed stdin gives.
    """

    def __init__(self, selections: Iterable[Any] = ()) -> None:
        self._queue: deque[Any] = deque(selections)
        self.asked: list[str] = []
        self.defaults: list[Any] = []
        self.notes: list[str] = []

    @property
    def remaining(self) -> int:
        return len(self._queue)

    def ask(
        self,
        step: WizardStep,
        options: list[Choice],
        default: Any,
        *,
        can_go_back: bool,
        draft: ChoiceDraft,
    ) -> Any:
        self.asked.append(step.name)
        self.defaults.append(default)
        if not self._queue:
            raise EOFError(f"No scripted answer for step '{step.name}'")

        selection = self._queue.popleft()
        if selection is DEFAULT:
            return default
        if selection == BACK:
            if not can_go_back:
                raise ValueError(f"Cannot go back from step '{step.name}'")
            return BACK
        if selection not in [option.value for option in options]:
            raise ValueError(f"{selection!r} is not a choice of step '{step.name}'")
        return selection

    def notify(self, message: str) -> None:
        self.notes.append(message)
