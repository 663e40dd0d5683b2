"""Pydantic v2 models for the scaffolding choice set.

``ChoiceSchema`` is the complete, immutable answer set that drives one
generation run.  ``ChoiceDraft`` is the partial answer set the wizard builds
one key at a time; every merge returns a new draft and enforces the
framework mutual-exclusion rule (``nextRouting`` only with Next.js,
``routing`` only with Vite).

Both models use snake_case attribute names with camelCase aliases, so the
wizard step keys (``packageManager``, ``nextRouting``, ``initGit`` ...) and
the Python names are accepted interchangeably.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class SchemaError(ValueError):
    """Raised for unknown axis values, conflicting fields or incomplete choices."""


# ---------------------------------------------------------------------------
# Enumerations (one per axis)
# ---------------------------------------------------------------------------

class PackageManager(str, Enum):
    """Package manager used to install and run the generated project."""
    NPM = "npm"
    YARN = "yarn"


class Framework(str, Enum):
    """Build tool (Vite) or meta-framework (Next.js)."""
    VITE = "vite"
    NEXTJS = "nextjs"


class NextRouting(str, Enum):
    """Next.js routing system."""
    APP = "app"
    PAGES = "pages"


class Routing(str, Enum):
    """Client-side routing library for Vite projects."""
    REACT_ROUTER = "react-router"
    NONE = "none"


class Styling(str, Enum):
    """Styling solution."""
    CSS = "css"
    TAILWIND = "tailwind"
    STYLED_COMPONENTS = "styled-components"


class StateManagement(str, Enum):
    """Global state container."""
    REDUX = "redux"
    ZUSTAND = "zustand"
    NONE = "none"


class ApiClient(str, Enum):
    """HTTP client / data-fetching combination."""
    AXIOS_REACT_QUERY = "axios-react-query"
    AXIOS_ONLY = "axios-only"
    FETCH_REACT_QUERY = "fetch-react-query"
    FETCH_ONLY = "fetch-only"
    NONE = "none"


class Testing(str, Enum):
    """Test runner."""
    VITEST = "vitest"
    JEST = "jest"
    NONE = "none"


class Deployment(str, Enum):
    """Deployment target."""
    VERCEL = "vercel"
    NETLIFY = "netlify"
    NONE = "none"


class Editor(str, Enum):
    """Editor opened after generation."""
    VSCODE = "vscode"
    CURSOR = "cursor"


# Fields every complete schema must carry, regardless of framework.
REQUIRED_FIELDS: tuple[str, ...] = (
    "package_manager",
    "framework",
    "typescript",
    "linting",
    "styling",
    "state_management",
    "api",
    "testing",
    "deployment",
    "init_git",
    "open_editor",
)

# Framework -> the conditional field it requires / the one it forbids.
_CONDITIONAL_FIELDS: dict[Framework, tuple[str, str]] = {
    Framework.VITE: ("routing", "next_routing"),
    Framework.NEXTJS: ("next_routing", "routing"),
}


# ---------------------------------------------------------------------------
# ChoiceSchema
# ---------------------------------------------------------------------------

class ChoiceSchema(BaseModel):
    """The complete set of scaffolding decisions for one generation run.

    Axes that are not given fall back to their most conservative value
    (no extra packages).  The framework-conditional field defaults to
    ``routing="none"`` for Vite and ``nextRouting="app"`` for Next.js.
    Constructing a schema with an unknown value, or with the other
    framework's conditional field, raises :class:`SchemaError`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    package_manager: PackageManager = Field(default=PackageManager.NPM, alias="packageManager")
    framework: Framework = Field(..., description="vite or nextjs")
    next_routing: Optional[NextRouting] = Field(default=None, alias="nextRouting")
    routing: Optional[Routing] = Field(default=None)
    typescript: bool = Field(default=False)
    linting: bool = Field(default=False)
    styling: Styling = Field(default=Styling.CSS)
    state_management: StateManagement = Field(
        default=StateManagement.NONE, alias="stateManagement"
    )
    api: ApiClient = Field(default=ApiClient.NONE)
    testing: Testing = Field(default=Testing.NONE)
    deployment: Deployment = Field(default=Deployment.NONE)
    init_git: bool = Field(default=False, alias="initGit")
    open_editor: bool = Field(default=False, alias="openEditor")
    editor: Editor = Field(default=Editor.VSCODE)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _schema_error(exc) from None

    @model_validator(mode="before")
    @classmethod
    def _fill_conditional_default(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        framework = data.get("framework")
        if framework in (Framework.VITE, "vite"):
            if "routing" not in data:
                data["routing"] = Routing.NONE
        elif framework in (Framework.NEXTJS, "nextjs"):
            if "next_routing" not in data and "nextRouting" not in data:
                data["next_routing"] = NextRouting.APP
        return data

    @model_validator(mode="after")
    def _check_mutual_exclusion(self) -> "ChoiceSchema":
        required, forbidden = _CONDITIONAL_FIELDS[self.framework]
        if getattr(self, forbidden) is not None:
            raise ValueError(
                f"'{_alias(forbidden)}' cannot be combined with framework '{self.framework.value}'"
            )
        if getattr(self, required) is None:
            raise ValueError(
                f"framework '{self.framework.value}' requires '{_alias(required)}'"
            )
        return self

    # -- Constructors ------------------------------------------------------

    @classmethod
    def from_answers(cls, answers: Mapping[str, Any]) -> "ChoiceSchema":
        """Build a schema from a mapping keyed by alias or field name."""
        return cls(**dict(answers))

    # -- Derived values ----------------------------------------------------

    @property
    def is_vite(self) -> bool:
        return self.framework is Framework.VITE

    @property
    def is_nextjs(self) -> bool:
        return self.framework is Framework.NEXTJS

    @property
    def script_ext(self) -> str:
        """Extension for plain script and config files (``ts`` or ``js``)."""
        return "ts" if self.typescript else "js"

    @property
    def component_ext(self) -> str:
        """Extension for files containing JSX (``tsx`` or ``jsx``)."""
        return "tsx" if self.typescript else "jsx"

    def answers(self) -> dict[str, Any]:
        """Return the schema as a JSON-ready dict keyed by the camelCase names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def describe(self) -> dict[str, str]:
        """Return a human-readable ``{label: value}`` mapping for summaries."""
        summary = {
            "Package manager": self.package_manager.value,
            "Framework": self.framework.value,
        }
        if self.is_nextjs:
            summary["Next.js router"] = self.next_routing.value
        else:
            summary["Routing"] = self.routing.value
        summary.update({
            "TypeScript": "yes" if self.typescript else "no",
            "Linting": "yes" if self.linting else "no",
            "Styling": self.styling.value,
            "State management": self.state_management.value,
            "API": self.api.value,
            "Testing": self.testing.value,
            "Deployment": self.deployment.value,
            "Git": "yes" if self.init_git else "no",
            "Open editor": self.editor.value if self.open_editor else "no",
        })
        return summary


# ---------------------------------------------------------------------------
# ChoiceDraft
# ---------------------------------------------------------------------------

class ChoiceDraft(BaseModel):
    """A partial, immutable answer set built up by the wizard.

    Every field is optional.  ``merge`` returns a new draft; changing the
    framework drops the other framework's conditional answer, and setting a
    conditional answer that contradicts the chosen framework raises
    :class:`SchemaError`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    package_manager: Optional[PackageManager] = Field(default=None, alias="packageManager")
    framework: Optional[Framework] = None
    next_routing: Optional[NextRouting] = Field(default=None, alias="nextRouting")
    routing: Optional[Routing] = None
    typescript: Optional[bool] = None
    linting: Optional[bool] = None
    styling: Optional[Styling] = None
    state_management: Optional[StateManagement] = Field(default=None, alias="stateManagement")
    api: Optional[ApiClient] = None
    testing: Optional[Testing] = None
    deployment: Optional[Deployment] = None
    init_git: Optional[bool] = Field(default=None, alias="initGit")
    open_editor: Optional[bool] = Field(default=None, alias="openEditor")
    editor: Optional[Editor] = None

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _schema_error(exc) from None

    @model_validator(mode="after")
    def _check_mutual_exclusion(self) -> "ChoiceDraft":
        if self.framework is None:
            return self
        _, forbidden = _CONDITIONAL_FIELDS[self.framework]
        if getattr(self, forbidden) is not None:
            raise ValueError(
                f"'{_alias(forbidden)}' cannot be combined with framework '{self.framework.value}'"
            )
        return self

    # -- Access ------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the answer stored under *key* (alias or field name)."""
        value = getattr(self, field_name(key))
        return default if value is None else value

    def has(self, key: str) -> bool:
        return getattr(self, field_name(key)) is not None

    def answers(self) -> dict[str, Any]:
        """Answered keys only, camelCase, JSON values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.answers()

    # -- Updates -----------------------------------------------------------

    def merge(self, delta: Mapping[str, Any]) -> "ChoiceDraft":
        """Return a new draft with *delta* applied."""
        data = self.model_dump(exclude_none=True)
        updates = {field_name(key): value for key, value in delta.items()}
        data.update(updates)

        if "framework" in updates and updates["framework"] is not None:
            framework = Framework(updates["framework"])
            _, forbidden = _CONDITIONAL_FIELDS[framework]
            if forbidden not in updates:
                data.pop(forbidden, None)

        return ChoiceDraft(**{k: v for k, v in data.items() if v is not None})

    def without(self, keys: Iterable[str]) -> "ChoiceDraft":
        """Return a new draft with the given answers cleared."""
        dropped = {field_name(key) for key in keys}
        data = {
            k: v for k, v in self.model_dump(exclude_none=True).items() if k not in dropped
        }
        return ChoiceDraft(**data)

    # -- Completion --------------------------------------------------------

    def missing(self) -> list[str]:
        """Return the camelCase keys still needed for a complete schema."""
        needed = list(REQUIRED_FIELDS)
        if self.framework is not None:
            needed.append(_CONDITIONAL_FIELDS[self.framework][0])
        return [_alias(name) for name in needed if getattr(self, name) is None]

    def complete(self) -> bool:
        return not self.missing()

    def to_schema(self) -> ChoiceSchema:
        """Freeze the draft into a :class:`ChoiceSchema`.

        Raises:
            SchemaError: If any required answer is missing.
        """
        missing = self.missing()
        if missing:
            raise SchemaError(f"Incomplete choices, missing: {', '.join(missing)}")
        return ChoiceSchema(**self.model_dump(exclude_none=True))

    @classmethod
    def from_schema(cls, schema: ChoiceSchema) -> "ChoiceDraft":
        return cls(**schema.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def field_name(key: str) -> str:
    """Map an alias (``nextRouting``) or field name to the field name.

    Raises:
        SchemaError: If *key* names no field.
    """
    if key in ChoiceDraft.model_fields:
        return key
    for name, info in ChoiceDraft.model_fields.items():
        if info.alias == key:
            return name
    raise SchemaError(f"Unknown choice key: {key!r}")


def _alias(name: str) -> str:
    alias = ChoiceDraft.model_fields[name].alias
    return alias or name


def _schema_error(exc: ValidationError) -> SchemaError:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "choices"
        problems.append(f"{location}: {err.get('msg', 'invalid value')}")
    return SchemaError("; ".join(problems))
