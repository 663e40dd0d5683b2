"""Application source generation (components, entry points, global styles).

Each supported framework/router combination is a :class:`ContentVariant`
record in ``CONTENT_VARIANTS``; :class:`ContentGenerator` picks the variant
for a choice set and renders its Jinja2 templates from
``templates/content/<variant>/``.

Only the Vite component is interactive (a ``useState`` counter); the
Next.js pages render static welcome text.  Router, store, API and test
files come from :mod:`kickstart.scaffolder.features` and are merged into
:meth:`ContentGenerator.source_files`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from kickstart.choices import ChoiceSchema, Framework, NextRouting, Routing, SchemaError, Styling
from kickstart.scaffolder.features import feature_context, feature_variants
from kickstart.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentVariant:
    """Template set and presentation data for one framework/router combination."""

    key: str
    template_dir: str
    styles_template: str
    component_path: str
    title: str
    interactive: bool


CONTENT_VARIANTS: dict[tuple[Framework, Optional[NextRouting]], ContentVariant] = {
    (Framework.VITE, None): ContentVariant(
        key="vite",
        template_dir="content/vite",
        styles_template="content/vite/styles.j2",
        component_path="src/App.{ext}",
        title="React Kickstart",
        interactive=True,
    ),
    (Framework.NEXTJS, NextRouting.APP): ContentVariant(
        key="nextjs-app",
        template_dir="content/nextjs-app",
        styles_template="content/nextjs/styles.j2",
        component_path="app/page.{ext}",
        title="Welcome to Next.js",
        interactive=False,
    ),
    (Framework.NEXTJS, NextRouting.PAGES): ContentVariant(
        key="nextjs-pages",
        template_dir="content/nextjs-pages",
        styles_template="content/nextjs/styles.j2",
        component_path="pages/index.{ext}",
        title="Welcome to Next.js",
        interactive=False,
    ),
}


def content_variant(
    framework: Framework | str,
    next_routing: NextRouting | str | None = None,
) -> ContentVariant:
    """Look up the variant for a framework and (Next.js only) router.

    Raises:
        SchemaError: If the combination has no variant.
    """
    try:
        key = (
            Framework(framework),
            NextRouting(next_routing) if next_routing is not None else None,
        )
    except ValueError as exc:
        raise SchemaError(str(exc)) from None
    variant = CONTENT_VARIANTS.get(key)
    if variant is None:
        raise SchemaError(
            f"No content variant for framework={key[0].value!r}, "
            f"nextRouting={key[1].value if key[1] else None!r}"
        )
    return variant


# ---------------------------------------------------------------------------
# Style tables
# ---------------------------------------------------------------------------

TAILWIND_CLASSES: dict[str, dict[str, str]] = {
    "container": {
        "vite": "max-w-4xl mx-auto p-8 text-center",
        "nextjs": "flex min-h-screen flex-col items-center justify-center p-8",
    },
    "heading": {
        "vite": "text-4xl font-bold mb-4",
        "nextjs": "text-4xl font-bold mb-4",
    },
    "button": {
        "vite": "bg-blue-500 hover:bg-blue-700 text-white font-bold py-2 px-4 rounded",
        "nextjs": "bg-blue-500 hover:bg-blue-700 text-white font-bold py-2 px-4 rounded",
    },
}

STYLED_RULES: dict[str, dict[str, tuple[str, ...]]] = {
    "container": {
        "vite": (
            "max-width: 1280px;",
            "margin: 0 auto;",
            "padding: 2rem;",
            "text-align: center;",
        ),
        "nextjs": (
            "display: flex;",
            "flex-direction: column;",
            "align-items: center;",
            "justify-content: center;",
            "min-height: 100vh;",
            "padding: 2rem;",
            "text-align: center;",
        ),
    },
    "heading": {
        "vite": ("font-size: 2.5rem;", "margin-bottom: 1rem;"),
        "nextjs": ("font-size: 2.5rem;", "margin-bottom: 1rem;"),
    },
    "button": {
        "vite": (
            "border-radius: 8px;",
            "border: 1px solid transparent;",
            "padding: 0.6em 1.2em;",
            "font-size: 1em;",
            "font-weight: 500;",
            "background-color: #1a1a1a;",
            "color: white;",
            "cursor: pointer;",
            "transition: border-color 0.25s;",
            "&:hover {",
            "  border-color: #646cff;",
            "}",
        ),
        "nextjs": (
            "background-color: #0070f3;",
            "color: white;",
            "font-weight: bold;",
            "border: none;",
            "border-radius: 4px;",
            "padding: 0.5rem 1rem;",
            "cursor: pointer;",
            "transition: background-color 0.3s ease;",
            "&:hover {",
            "  background-color: #0051a2;",
            "}",
        ),
    },
}


# ---------------------------------------------------------------------------
# ContentGenerator
# ---------------------------------------------------------------------------

class ContentGenerator:
    """Renders the application source files for one choice set.

    Args:
        choices: Validated choice schema.
        project_name: Used for the document title and metadata.
        renderer: Template renderer; a default one is created if omitted.
    """

    def __init__(
        self,
        choices: ChoiceSchema,
        project_name: str,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.choices = choices
        self.project_name = project_name
        self.renderer = renderer or TemplateRenderer()
        self.variant = content_variant(choices.framework, choices.next_routing)

    # -- Context -----------------------------------------------------------

    @property
    def _family(self) -> str:
        return "vite" if self.choices.is_vite else "nextjs"

    @property
    def home_path(self) -> str:
        """Project path of the component that shows the welcome content."""
        ext = self.choices.component_ext
        if self.choices.routing is Routing.REACT_ROUTER:
            return f"src/pages/HomePage.{ext}"
        return self.variant.component_path.format(ext=ext)

    def context(self, styling: Styling | str | None = None) -> dict[str, Any]:
        """Template context for *styling* (defaults to the chosen styling)."""
        style = _styling(styling if styling is not None else self.choices.styling)
        router = self.choices.routing is Routing.REACT_ROUTER
        ctx: dict[str, Any] = {
            "project_name": self.project_name,
            "title": self.variant.title,
            "styling": style.value,
            "typescript": self.choices.typescript,
            "ext": self.choices.component_ext,
            "file": self.home_path,
            "edit_path": self.home_path,
            "component_name": "HomePage" if router else "App",
            "interactive": self.variant.interactive,
            "project_family": self._family,
            "container": "",
            "heading": "",
            "button": "",
        }
        ctx.update(feature_context(self.choices, self.variant.key))
        if style is Styling.TAILWIND:
            for element, classes in TAILWIND_CLASSES.items():
                ctx[element] = classes[self._family]
        elif style is Styling.STYLED_COMPONENTS:
            for element, rules in STYLED_RULES.items():
                ctx[element] = list(rules[self._family])
        return ctx

    def _render(
        self,
        name: str,
        styling: Styling | str | None = None,
        *,
        file: str | None = None,
    ) -> str:
        return self._render_template(f"{self.variant.template_dir}/{name}", file, styling)

    def _render_template(
        self,
        template: str,
        file: str | None = None,
        styling: Styling | str | None = None,
    ) -> str:
        ctx = self.context(styling)
        if file is not None:
            ctx["file"] = file
        return self.renderer.render(template, ctx).lstrip("\n")

    # -- Component pieces --------------------------------------------------

    def generate_imports(self, styling: Styling | str | None = None) -> str:
        return self._render("imports.j2", styling)

    def generate_styles(self, styling: Styling | str | None = None) -> str:
        """Styled-component declarations; empty for the other styling options."""
        style = _styling(styling if styling is not None else self.choices.styling)
        if style is not Styling.STYLED_COMPONENTS:
            return ""
        return self.renderer.render(self.variant.styles_template, self.context(style))

    def generate_component(self, styling: Styling | str | None = None) -> str:
        return self._render("component.j2", styling)

    def generate_app_component(self, styling: Styling | str | None = None) -> str:
        """Full component module: imports, styled declarations, component."""
        parts = (
            self.generate_imports(styling),
            self.generate_styles(styling),
            self.generate_component(styling),
        )
        return "\n".join(part.strip("\n") + "\n" for part in parts if part.strip())

    def generate_entry(self) -> Optional[str]:
        """Vite ``main`` module; ``None`` for Next.js, which owns its entry point."""
        if not self.choices.is_vite:
            return None
        return self._render("entry.j2", file=f"src/main.{self.choices.component_ext}")

    def feature_files(self) -> dict[str, str]:
        """Router, store, API and test files for the enabled features."""
        files: dict[str, str] = {}
        for variant in feature_variants(self.choices, self.variant.key):
            for path, template in variant.render_targets(self.choices):
                files[path] = self._render_template(template, path)
        return files

    # -- Full file set -----------------------------------------------------

    def source_files(self) -> dict[str, str]:
        """Return every generated source file keyed by project-relative path."""
        ext = self.choices.component_ext
        styling = self.choices.styling
        uses_stylesheet = styling in (Styling.CSS, Styling.TAILWIND)
        files: dict[str, str] = {}

        if self.choices.is_vite:
            files["index.html"] = self._render("index.html.j2")
            files[f"src/main.{ext}"] = self.generate_entry() or ""
            files[self.home_path] = self.generate_app_component()
            if uses_stylesheet:
                files["src/index.css"] = self._render_shared("globals.css.j2")
            if styling is Styling.CSS:
                files["src/App.css"] = self._render("App.css.j2")
            if self.choices.typescript:
                files["src/vite-env.d.ts"] = self._render("vite-env.d.ts.j2")

        elif self.choices.next_routing is NextRouting.APP:
            files[f"app/layout.{ext}"] = self._render("layout.j2", file=f"app/layout.{ext}")
            files[f"app/page.{ext}"] = self.generate_app_component()
            if uses_stylesheet:
                files["app/globals.css"] = self._render_shared("globals.css.j2")
            else:
                files[f"app/styled-components-registry.{ext}"] = self._render("registry.j2")

        else:
            files[f"pages/_app.{ext}"] = self._render("_app.j2", file=f"pages/_app.{ext}")
            files[f"pages/index.{ext}"] = self.generate_app_component()
            if uses_stylesheet:
                files["styles/globals.css"] = self._render_shared("globals.css.j2")
            else:
                files[f"pages/_document.{ext}"] = self._render("_document.j2")

        files.update(self.feature_files())
        return files

    def _render_shared(self, name: str) -> str:
        return self.renderer.render(f"content/shared/{name}", self.context())


def _styling(value: Styling | str) -> Styling:
    try:
        return Styling(value)
    except ValueError:
        raise SchemaError(f"Unknown styling option: {value!r}") from None
