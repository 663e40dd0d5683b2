"""Wizard step definitions.

Every question the wizard asks is a :class:`WizardStep` record in ``STEPS``.
A step knows its choices and static default for the current draft, which
step comes next, and whether it applies at all (``should_show``).  Steps
never mutate anything: the wizard merges ``step.delta(selection)`` into its
immutable :class:`~kickstart.choices.ChoiceDraft`.
"""

from __future__ import annotations

import dataclasses
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from kickstart.choices import (
    ApiClient,
    ChoiceDraft,
    Deployment,
    Editor,
    Framework,
    NextRouting,
    PackageManager,
    Routing,
    StateManagement,
    Styling,
    Testing,
)


COMPLETE = "complete"
SKIP = "__skip__"
BACK = "__back__"

TOTAL_POSITIONS = 12


@dataclass(frozen=True)
class Choice:
    """One selectable option of a step."""

    label: str
    value: Any
    description: str = ""


@dataclass(frozen=True)
class PackageManagerInfo:
    """A package manager the first step can offer."""

    name: PackageManager
    version: Optional[str] = None
    available: bool = True


@dataclass(frozen=True)
class WizardStep:
    """A single wizard question.

    ``choices``, ``default`` and ``should_show`` receive the current draft;
    ``next_step`` receives the selection (or ``SKIP``) and the draft and
    returns the next step name or ``COMPLETE``.  ``to_delta`` and
    ``current`` are only needed when the selection is not stored verbatim
    under ``answer_key``.
    """

    name: str
    answer_key: str
    position: int
    title: str
    message: str
    choices: Callable[[ChoiceDraft], list[Choice]]
    default: Callable[[ChoiceDraft], Any]
    next_step: Callable[[Any, ChoiceDraft], str]
    should_show: Optional[Callable[[ChoiceDraft], bool]] = None
    to_delta: Optional[Callable[[Any], dict[str, Any]]] = None
    current: Optional[Callable[[ChoiceDraft], Any]] = None
    advise: Optional[Callable[[Any, ChoiceDraft], list[str]]] = None
    extra_keys: tuple[str, ...] = field(default=())
    total: int = TOTAL_POSITIONS

    @property
    def keys(self) -> tuple[str, ...]:
        """Every draft key this step writes."""
        return (self.answer_key,) + self.extra_keys

    def visible(self, draft: ChoiceDraft) -> bool:
        return self.should_show is None or self.should_show(draft)

    def delta(self, selection: Any) -> dict[str, Any]:
        if self.to_delta is not None:
            return self.to_delta(selection)
        return {self.answer_key: selection}

    def answer(self, draft: ChoiceDraft) -> Any:
        """The selection that reproduces the draft's current answer, or ``None``."""
        if self.current is not None:
            return self.current(draft)
        return draft.get(self.answer_key)

    def initial(self, draft: ChoiceDraft) -> Any:
        """Pre-selected value: the existing answer, else the static default."""
        existing = self.answer(draft)
        return existing if existing is not None else self.default(draft)

    def advisories(self, selection: Any, draft: ChoiceDraft) -> list[str]:
        if self.advise is None:
            return []
        return self.advise(selection, draft)


# ---------------------------------------------------------------------------
# Shared choice lists
# ---------------------------------------------------------------------------

_YES_NO = [Choice("Yes", True), Choice("No", False)]


def _yes_no(draft: ChoiceDraft) -> list[Choice]:
    return list(_YES_NO)


def _constant(value: Any) -> Callable[[ChoiceDraft], Any]:
    return lambda draft: value


def _goto(name: str) -> Callable[[Any, ChoiceDraft], str]:
    return lambda selection, draft: name


def _first(choices: Callable[[ChoiceDraft], list[Choice]]) -> Callable[[ChoiceDraft], Any]:
    return lambda draft: choices(draft)[0].value


# ---------------------------------------------------------------------------
# Step-specific behaviour
# ---------------------------------------------------------------------------

def _package_manager_choices(draft: ChoiceDraft) -> list[Choice]:
    return [Choice("npm", PackageManager.NPM.value), Choice("yarn", PackageManager.YARN.value)]


def _framework_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("Vite", Framework.VITE.value, "Fast dev server, optimized builds"),
        Choice("Next.js", Framework.NEXTJS.value, "SSR, full-stack framework"),
    ]


def _after_framework(selection: Any, draft: ChoiceDraft) -> str:
    return "nextjsOptions" if draft.framework is Framework.NEXTJS else "routing"


def _next_routing_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("App Router", NextRouting.APP.value, "Newer, supports Server Components"),
        Choice("Pages Router", NextRouting.PAGES.value, "Traditional routing system"),
    ]


def _routing_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("React Router", Routing.REACT_ROUTER.value, "Declarative client-side routing"),
        Choice("None", Routing.NONE.value, "No routing library"),
    ]


def _styling_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("Tailwind CSS", Styling.TAILWIND.value, "Utility-first CSS framework"),
        Choice("styled-components", Styling.STYLED_COMPONENTS.value, "CSS-in-JS library"),
        Choice("Plain CSS", Styling.CSS.value, "No additional dependencies"),
    ]


def _state_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("Redux Toolkit", StateManagement.REDUX.value, "Predictable state container"),
        Choice("Zustand", StateManagement.ZUSTAND.value, "Small, hook-based store"),
        Choice("None", StateManagement.NONE.value, "No global state management"),
    ]


def _api_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("Axios + React Query", ApiClient.AXIOS_REACT_QUERY.value, "HTTP client with caching"),
        Choice("Axios only", ApiClient.AXIOS_ONLY.value, "HTTP client, manual state"),
        Choice("Fetch + React Query", ApiClient.FETCH_REACT_QUERY.value, "Native fetch with caching"),
        Choice("Fetch only", ApiClient.FETCH_ONLY.value, "Native fetch, no extra packages"),
        Choice("Skip", ApiClient.NONE.value, "I'll handle API setup myself"),
    ]


def _testing_choices(draft: ChoiceDraft) -> list[Choice]:
    vitest = Choice("Vitest", Testing.VITEST.value, "Vite-native test runner")
    jest = Choice("Jest", Testing.JEST.value, "Mature runner with next/jest integration")
    skip = Choice("None", Testing.NONE.value, "Skip testing setup")
    if draft.framework is Framework.NEXTJS:
        return [dataclasses.replace(jest, label="Jest (Recommended)"), vitest, skip]
    return [dataclasses.replace(vitest, label="Vitest (Recommended)"), jest, skip]


def _testing_advice(selection: Any, draft: ChoiceDraft) -> list[str]:
    if selection == Testing.JEST.value and draft.framework is Framework.VITE:
        return ["Using Jest with Vite. Consider Vitest for better Vite integration and faster runs."]
    if selection == Testing.VITEST.value and draft.framework is Framework.NEXTJS:
        return ["Using Vitest with Next.js. Jest has built-in Next.js integration via next/jest."]
    return []


def _deployment_choices(draft: ChoiceDraft) -> list[Choice]:
    vercel = Choice("Vercel", Deployment.VERCEL.value, "Zero-config deployments")
    netlify = Choice("Netlify", Deployment.NETLIFY.value, "Static hosting with build plugins")
    skip = Choice("Skip", Deployment.NONE.value, "Configure deployment manually later")
    if draft.framework is Framework.NEXTJS:
        return [dataclasses.replace(vercel, label="Vercel (Recommended)"), netlify, skip]
    return [dataclasses.replace(netlify, label="Netlify (Recommended)"), vercel, skip]


def _deployment_advice(selection: Any, draft: ChoiceDraft) -> list[str]:
    if selection == Deployment.NETLIFY.value and draft.framework is Framework.NEXTJS:
        return ["Netlify with Next.js uses a static export; API routes and SSR are unavailable."]
    return []


_NO_EDITOR = "none"


def _editor_choices(draft: ChoiceDraft) -> list[Choice]:
    return [
        Choice("No", _NO_EDITOR),
        Choice("Visual Studio Code", Editor.VSCODE.value),
        Choice("Cursor", Editor.CURSOR.value),
    ]


def _editor_delta(selection: Any) -> dict[str, Any]:
    if selection == _NO_EDITOR:
        return {"openEditor": False}
    return {"openEditor": True, "editor": selection}


def _editor_current(draft: ChoiceDraft) -> Any:
    if draft.open_editor is None:
        return None
    if not draft.open_editor:
        return _NO_EDITOR
    return (draft.editor or Editor.VSCODE).value


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def _build_steps() -> dict[str, WizardStep]:
    steps = [
        WizardStep(
            name="packageManager",
            answer_key="packageManager",
            position=1,
            title="Package Manager",
            message="Which package manager would you like to use?",
            choices=_package_manager_choices,
            default=_constant(PackageManager.NPM.value),
            next_step=_goto("framework"),
        ),
        WizardStep(
            name="framework",
            answer_key="framework",
            position=2,
            title="Framework Selection",
            message="Which framework would you like to use?",
            choices=_framework_choices,
            default=_constant(Framework.VITE.value),
            next_step=_after_framework,
        ),
        WizardStep(
            name="nextjsOptions",
            answer_key="nextRouting",
            position=3,
            title="Next.js Options",
            message="Which Next.js routing system would you like to use?",
            choices=_next_routing_choices,
            default=_constant(NextRouting.APP.value),
            next_step=_goto("language"),
            should_show=lambda draft: draft.framework is Framework.NEXTJS,
        ),
        WizardStep(
            name="routing",
            answer_key="routing",
            position=3,
            title="Routing Options",
            message="Which routing library would you like to use?",
            choices=_routing_choices,
            default=_constant(Routing.REACT_ROUTER.value),
            next_step=_goto("language"),
            should_show=lambda draft: draft.framework is Framework.VITE,
        ),
        WizardStep(
            name="language",
            answer_key="typescript",
            position=4,
            title="Language Options",
            message="Would you like to use TypeScript?",
            choices=_yes_no,
            default=_constant(False),
            next_step=_goto("codeQuality"),
        ),
        WizardStep(
            name="codeQuality",
            answer_key="linting",
            position=5,
            title="Code Quality",
            message="Would you like to include ESLint and Prettier for code quality?",
            choices=_yes_no,
            default=_constant(True),
            next_step=_goto("styling"),
        ),
        WizardStep(
            name="styling",
            answer_key="styling",
            position=6,
            title="Styling Solution",
            message="Which styling solution would you like to use?",
            choices=_styling_choices,
            default=_constant(Styling.TAILWIND.value),
            next_step=_goto("stateManagement"),
        ),
        WizardStep(
            name="stateManagement",
            answer_key="stateManagement",
            position=7,
            title="State Management",
            message="Would you like to add global state management?",
            choices=_state_choices,
            default=_constant(StateManagement.NONE.value),
            next_step=_goto("api"),
        ),
        WizardStep(
            name="api",
            answer_key="api",
            position=8,
            title="API & Data Fetching",
            message="Set up API boilerplate?",
            choices=_api_choices,
            default=_constant(ApiClient.AXIOS_REACT_QUERY.value),
            next_step=_goto("testing"),
        ),
        WizardStep(
            name="testing",
            answer_key="testing",
            position=9,
            title="Testing Framework",
            message="Which testing framework would you like to use?",
            choices=_testing_choices,
            default=_first(_testing_choices),
            next_step=_goto("deployment"),
            advise=_testing_advice,
        ),
        WizardStep(
            name="deployment",
            answer_key="deployment",
            position=10,
            title="Deployment Platform",
            message="Which deployment platform would you like to configure?",
            choices=_deployment_choices,
            default=_first(_deployment_choices),
            next_step=_goto("git"),
            advise=_deployment_advice,
        ),
        WizardStep(
            name="git",
            answer_key="initGit",
            position=11,
            title="Git Options",
            message="Initialize a git repository?",
            choices=_yes_no,
            default=_constant(True),
            next_step=_goto("editor"),
        ),
        WizardStep(
            name="editor",
            answer_key="openEditor",
            position=12,
            title="Editor Options",
            message="Open the project in an editor after creation?",
            choices=_editor_choices,
            default=_constant(_NO_EDITOR),
            next_step=_goto(COMPLETE),
            to_delta=_editor_delta,
            current=_editor_current,
            extra_keys=("editor",),
        ),
    ]
    return {step.name: step for step in steps}


STEPS: dict[str, WizardStep] = _build_steps()

STEP_ORDER: tuple[str, ...] = tuple(STEPS)

FIRST_STEP = STEP_ORDER[0]


def steps_after(name: str) -> tuple[str, ...]:
    """Names of the steps that follow *name* in ``STEP_ORDER``."""
    index = STEP_ORDER.index(name)
    return STEP_ORDER[index + 1:]


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

def discover_package_managers() -> list[PackageManagerInfo]:
    """Report which package managers are on ``PATH``.  Versions are not queried."""
    return [
        PackageManagerInfo(name=manager, available=shutil.which(manager.value) is not None)
        for manager in PackageManager
    ]


def package_manager_step(
    managers: Iterable[PackageManagerInfo],
    default: PackageManager | str = PackageManager.NPM,
) -> WizardStep:
    """The first step, restricted to the available managers.

    Falls back to offering npm when nothing is available.  The default is
    *default* when it is offered, else the first offered manager.
    """
    offered = [info for info in managers if info.available]
    if not offered:
        offered = [PackageManagerInfo(name=PackageManager.NPM)]

    options = [
        Choice(
            f"{info.name.value} ({info.version})" if info.version else info.name.value,
            info.name.value,
        )
        for info in offered
    ]
    values = [option.value for option in options]
    wanted = PackageManager(default).value
    default_value = wanted if wanted in values else values[0]

    return dataclasses.replace(
        STEPS["packageManager"],
        choices=lambda draft: list(options),
        default=_constant(default_value),
    )


def editor_step(preferred: Editor | str = Editor.VSCODE) -> WizardStep:
    """The last step, listing *preferred* as the first editor."""
    preferred = Editor(preferred)

    def choices(draft: ChoiceDraft) -> list[Choice]:
        options = _editor_choices(draft)
        editors = sorted(options[1:], key=lambda option: option.value != preferred.value)
        return [options[0]] + editors

    return dataclasses.replace(STEPS["editor"], choices=choices)
