"""Feature sources layered on top of the base application.

The router, the state store, the API layer and the example test each add a
set of files whose location depends on the framework family.  Every
``(feature, family)`` pair is a :class:`FeatureVariant` record in
``FEATURE_VARIANTS``; :func:`feature_variants` picks the records a choice
set enables.  :class:`FeatureLayout` fixes where the shared modules live for
each family so templates can compute relative imports between them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from kickstart.choices import (
    ApiClient,
    ChoiceSchema,
    Routing,
    SchemaError,
    StateManagement,
    Styling,
    Testing,
)


class Feature(str, Enum):
    """Optional parts of the generated application."""

    ROUTER = "react-router"
    REDUX = "redux"
    ZUSTAND = "zustand"
    AXIOS_REACT_QUERY = "axios-react-query"
    AXIOS_ONLY = "axios-only"
    FETCH_REACT_QUERY = "fetch-react-query"
    FETCH_ONLY = "fetch-only"
    PROVIDERS = "providers"
    EXAMPLE_TEST = "example-test"


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FeatureLayout:
    """Where a family keeps its feature modules.

    Module paths are project-relative and carry no extension.
    """

    components: str
    store: str
    hooks: str
    slice: str
    counter_store: str
    api: str
    providers: str
    test: str
    subject: str
    subject_name: str


_NEXT_STATE = {
    "components": "components",
    "store": "lib/store",
    "hooks": "lib/hooks",
    "slice": "lib/features/counter/counterSlice",
    "counter_store": "lib/counterStore",
    "api": "lib/api",
}

FEATURE_LAYOUTS: dict[str, FeatureLayout] = {
    "vite": FeatureLayout(
        components="src/components",
        store="src/store/store",
        hooks="src/store/hooks",
        slice="src/store/counterSlice",
        counter_store="src/store/counterStore",
        api="src/api",
        providers="src/providers",
        test="src/__tests__/App.test",
        subject="src/App",
        subject_name="App",
    ),
    "nextjs-app": FeatureLayout(
        **_NEXT_STATE,
        providers="app/providers",
        test="__tests__/page.test",
        subject="app/page",
        subject_name="Home",
    ),
    "nextjs-pages": FeatureLayout(
        **_NEXT_STATE,
        providers="components/Providers",
        test="__tests__/index.test",
        subject="pages/index",
        subject_name="Home",
    ),
}


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FeatureFile:
    """One generated file.

    ``path`` may contain ``{ext}`` (jsx/tsx) and ``{script}`` (js/ts);
    ``template`` is relative to ``templates/features/``.  ``when`` limits
    the file to choice sets it accepts.
    """

    path: str
    template: str
    when: Optional[Callable[[ChoiceSchema], bool]] = None

    def output_path(self, choices: ChoiceSchema) -> str:
        return self.path.format(ext=choices.component_ext, script=choices.script_ext)


@dataclass(frozen=True)
class FeatureVariant:
    """The files one feature contributes to one framework family."""

    feature: Feature
    family: str
    files: tuple[FeatureFile, ...]

    def render_targets(self, choices: ChoiceSchema) -> list[tuple[str, str]]:
        """``(output path, template path)`` pairs enabled for *choices*."""
        return [
            (file.output_path(choices), f"features/{file.template}")
            for file in self.files
            if file.when is None or file.when(choices)
        ]


def _uses_css(choices: ChoiceSchema) -> bool:
    return choices.styling is Styling.CSS


def _counter(layout: FeatureLayout) -> FeatureFile:
    return FeatureFile(f"{layout.components}/Counter.{{ext}}", "state/Counter.j2")


def _state_files(feature: Feature, layout: FeatureLayout) -> tuple[FeatureFile, ...]:
    if feature is Feature.REDUX:
        return (
            FeatureFile(f"{layout.store}.{{script}}", "state/store.j2"),
            FeatureFile(f"{layout.hooks}.{{script}}", "state/hooks.j2"),
            FeatureFile(f"{layout.slice}.{{script}}", "state/counterSlice.j2"),
            _counter(layout),
        )
    return (
        FeatureFile(f"{layout.counter_store}.{{script}}", "state/counterStore.j2"),
        _counter(layout),
    )


def _api_files(layout: FeatureLayout, client: str, react_query: bool) -> tuple[FeatureFile, ...]:
    files = [
        FeatureFile(f"{layout.api}/config/api-client.{{script}}", f"api/{client}.j2"),
        FeatureFile(f"{layout.api}/services/todo-service.{{script}}", "api/todo-service.j2"),
        FeatureFile(f"{layout.api}/services/index.{{script}}", "api/services-index.j2"),
        FeatureFile(".env", "api/env.j2"),
        FeatureFile(".env.example", "api/env.example.j2"),
    ]
    if react_query:
        files += [
            FeatureFile(f"{layout.api}/config/query-client.{{script}}", "api/query-client.j2"),
            FeatureFile(f"{layout.api}/hooks/use-todos.{{script}}", "api/use-todos.j2"),
            FeatureFile(f"{layout.api}/hooks/index.{{script}}", "api/hooks-index.j2"),
        ]
    return tuple(files)


_API_CLIENTS: dict[Feature, tuple[str, bool]] = {
    Feature.AXIOS_REACT_QUERY: ("axios-client", True),
    Feature.AXIOS_ONLY: ("axios-client", False),
    Feature.FETCH_REACT_QUERY: ("fetch-client", True),
    Feature.FETCH_ONLY: ("fetch-client", False),
}


def _build_variants() -> dict[tuple[Feature, str], FeatureVariant]:
    variants: dict[tuple[Feature, str], FeatureVariant] = {}

    def add(feature: Feature, family: str, *files: FeatureFile) -> None:
        variants[(feature, family)] = FeatureVariant(feature, family, files)

    add(
        Feature.ROUTER,
        "vite",
        FeatureFile("src/App.{ext}", "router/App.j2"),
        FeatureFile("src/components/Layout.{ext}", "router/Layout.j2"),
        FeatureFile("src/components/Layout.css", "router/Layout.css.j2", when=_uses_css),
        FeatureFile("src/pages/AboutPage.{ext}", "router/AboutPage.j2"),
        FeatureFile("src/pages/NotFoundPage.{ext}", "router/NotFoundPage.j2"),
    )
    for family, layout in FEATURE_LAYOUTS.items():
        for feature in (Feature.REDUX, Feature.ZUSTAND):
            add(feature, family, *_state_files(feature, layout))
        for feature, (client, react_query) in _API_CLIENTS.items():
            add(feature, family, *_api_files(layout, client, react_query))
        add(
            Feature.PROVIDERS,
            family,
            FeatureFile(f"{layout.providers}.{{ext}}", "providers/Providers.j2"),
        )
        add(
            Feature.EXAMPLE_TEST,
            family,
            FeatureFile(f"{layout.test}.{{ext}}", "testing/example-test.j2"),
        )
    return variants


FEATURE_VARIANTS: dict[tuple[Feature, str], FeatureVariant] = _build_variants()


def feature_variant(feature: Feature | str, family: str) -> FeatureVariant:
    """Look up the variant of *feature* for *family*.

    Raises:
        SchemaError: If the feature is unknown or not offered for the family.
    """
    try:
        key = (Feature(feature), family)
    except ValueError:
        raise SchemaError(f"Unknown feature: {feature!r}") from None
    variant = FEATURE_VARIANTS.get(key)
    if variant is None:
        raise SchemaError(f"Feature {key[0].value!r} is not available for {family!r}")
    return variant


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def uses_react_query(choices: ChoiceSchema) -> bool:
    return choices.api in (ApiClient.AXIOS_REACT_QUERY, ApiClient.FETCH_REACT_QUERY)


def uses_providers(choices: ChoiceSchema) -> bool:
    """True when the app needs a provider component (Redux store or query client)."""
    return choices.state_management is StateManagement.REDUX or uses_react_query(choices)


def enabled_features(choices: ChoiceSchema) -> list[Feature]:
    features: list[Feature] = []
    if choices.routing is Routing.REACT_ROUTER:
        features.append(Feature.ROUTER)
    if choices.state_management is not StateManagement.NONE:
        features.append(Feature(choices.state_management.value))
    if choices.api is not ApiClient.NONE:
        features.append(Feature(choices.api.value))
    if uses_providers(choices):
        features.append(Feature.PROVIDERS)
    if choices.testing is not Testing.NONE:
        features.append(Feature.EXAMPLE_TEST)
    return features


def feature_variants(choices: ChoiceSchema, family: str) -> list[FeatureVariant]:
    return [feature_variant(feature, family) for feature in enabled_features(choices)]


def feature_context(choices: ChoiceSchema, family: str) -> dict[str, Any]:
    """Template variables shared by the base sources and the feature files."""
    layout = FEATURE_LAYOUTS[family]
    state = choices.state_management
    return {
        "family": family,
        "nextjs": choices.is_nextjs,
        "router": choices.routing is Routing.REACT_ROUTER,
        "state": state.value,
        "counter": state is not StateManagement.NONE,
        "counter_title": "Redux Toolkit Counter" if state is StateManagement.REDUX else "Zustand Counter",
        "api": choices.api.value,
        "axios": choices.api in (ApiClient.AXIOS_REACT_QUERY, ApiClient.AXIOS_ONLY),
        "react_query": uses_react_query(choices),
        "providers": uses_providers(choices),
        "testing": choices.testing.value,
        "env_prefix": "VITE_" if choices.is_vite else "NEXT_PUBLIC_",
        "env_source": "import.meta.env" if choices.is_vite else "process.env",
        "subject_name": layout.subject_name,
        "paths": {
            "app_css": "src/App.css",
            "counter": f"{layout.components}/Counter",
            "store": layout.store,
            "hooks": layout.hooks,
            "slice": layout.slice,
            "counter_store": layout.counter_store,
            "providers": layout.providers,
            "query_client": f"{layout.api}/config/query-client",
            "subject": layout.subject,
        },
    }
