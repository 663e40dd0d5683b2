"""Tests for application source generation (kickstart.scaffolder.content).

Covers:
- Variant lookup per framework/router
- Imports, styles and component rendering per styling option
- Interactive (Vite) vs. static (Next.js) components
- The full source file set for each variant
- Router, store, provider, API and example-test files merged into that set
"""

from __future__ import annotations

import pytest

from kickstart.choices import ChoiceSchema, SchemaError
from kickstart.scaffolder.content import (
    CONTENT_VARIANTS,
    TAILWIND_CLASSES,
    ContentGenerator,
    content_variant,
)


pytestmark = pytest.mark.unit


def _generator(renderer, **answers) -> ContentGenerator:
    return ContentGenerator(ChoiceSchema(**answers), "my-app", renderer)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TestContentVariant:
    def test_three_variants(self):
        assert len(CONTENT_VARIANTS) == 3

    def test_lookup(self):
        assert content_variant("vite").key == "vite"
        assert content_variant("nextjs", "app").key == "nextjs-app"
        assert content_variant("nextjs", "pages").key == "nextjs-pages"

    def test_only_vite_is_interactive(self):
        assert content_variant("vite").interactive
        assert not content_variant("nextjs", "app").interactive

    def test_unknown_combination(self):
        with pytest.raises(SchemaError):
            content_variant("nextjs")
        with pytest.raises(SchemaError):
            content_variant("vite", "app")

    def test_unknown_value(self):
        with pytest.raises(SchemaError):
            content_variant("remix")


# ---------------------------------------------------------------------------
# Component pieces
# ---------------------------------------------------------------------------


class TestViteComponent:
    def test_css_imports(self, renderer):
        imports = _generator(renderer, framework="vite", styling="css").generate_imports()
        assert "import { useState } from 'react';" in imports
        assert "import './App.css';" in imports
        assert "styled-components" not in imports

    def test_tailwind_uses_class_table(self, renderer):
        component = _generator(renderer, framework="vite", styling="tailwind").generate_component()
        assert f'className="{TAILWIND_CLASSES["container"]["vite"]}"' in component
        assert f'className="{TAILWIND_CLASSES["button"]["vite"]}"' in component

    def test_interactive_counter(self, renderer):
        component = _generator(renderer, framework="vite").generate_component()
        assert "const [count, setCount] = useState(0);" in component
        assert "count is {count}" in component
        assert "export default App;" in component

    def test_styled_components_declarations(self, renderer):
        generator = _generator(renderer, framework="vite", styling="styled-components")
        styles = generator.generate_styles()
        assert "const Container = styled.div`" in styles
        assert "const Header = styled.h1`" in styles
        assert "  max-width: 1280px;" in styles

    def test_styles_empty_without_styled_components(self, renderer):
        assert _generator(renderer, framework="vite", styling="tailwind").generate_styles() == ""

    def test_app_component_sections_in_order(self, renderer):
        generator = _generator(renderer, framework="vite", styling="styled-components")
        body = generator.generate_app_component()
        assert body.index("import styled") < body.index("const Container") < body.index("function App")
        assert "\n\n\n" not in body
        assert body.endswith("\n")

    def test_edit_path_uses_extension(self, renderer):
        component = _generator(renderer, framework="vite", typescript=True).generate_component()
        assert "src/App.tsx" in component

    def test_override_styling_argument(self, renderer):
        generator = _generator(renderer, framework="vite", styling="css")
        assert "import styled" in generator.generate_imports("styled-components")

    def test_unknown_styling_argument(self, renderer):
        with pytest.raises(SchemaError):
            _generator(renderer, framework="vite").generate_imports("sass")

    def test_entry(self, renderer):
        entry = _generator(renderer, framework="vite", typescript=True).generate_entry()
        assert "ReactDOM.createRoot(document.getElementById('root')!)" in entry
        assert "import './index.css';" in entry


class TestNextComponent:
    def test_app_router_styled_is_client_component(self, renderer):
        generator = _generator(
            renderer, framework="nextjs", nextRouting="app", styling="styled-components"
        )
        body = generator.generate_app_component()
        assert body.startswith("'use client';")
        assert "const Title = styled.h1`" in body
        assert "useState" not in body

    def test_app_router_static_page(self, renderer):
        body = _generator(renderer, framework="nextjs", nextRouting="app").generate_app_component()
        assert "export default function Home()" in body
        assert "Welcome to Next.js" in body
        assert "'use client'" not in body

    def test_pages_router_uses_head(self, renderer):
        body = _generator(renderer, framework="nextjs", nextRouting="pages").generate_app_component()
        assert body.startswith("import Head from 'next/head';")
        assert "<title>My App</title>" in body
        assert "pages/index.jsx" in body

    def test_no_entry_for_nextjs(self, renderer):
        assert _generator(renderer, framework="nextjs").generate_entry() is None


# ---------------------------------------------------------------------------
# Source file sets
# ---------------------------------------------------------------------------


class TestSourceFiles:
    def test_vite_css(self, renderer):
        files = _generator(renderer, framework="vite", styling="css").source_files()
        assert set(files) == {"index.html", "src/main.jsx", "src/App.jsx", "src/index.css", "src/App.css"}

    def test_vite_tailwind_typescript(self, renderer):
        files = _generator(
            renderer, framework="vite", styling="tailwind", typescript=True
        ).source_files()
        assert set(files) == {
            "index.html", "src/main.tsx", "src/App.tsx", "src/index.css", "src/vite-env.d.ts",
        }
        assert files["src/vite-env.d.ts"] == '/// <reference types="vite/client" />\n'
        assert files["src/index.css"].startswith("@tailwind base;")

    def test_vite_styled_components_has_no_stylesheet(self, renderer):
        files = _generator(renderer, framework="vite", styling="styled-components").source_files()
        assert "src/index.css" not in files
        assert "import './index.css';" not in files["src/main.jsx"]

    def test_next_app_css(self, renderer):
        files = _generator(renderer, framework="nextjs", nextRouting="app").source_files()
        assert set(files) == {"app/layout.jsx", "app/page.jsx", "app/globals.css"}
        assert "import './globals.css';" in files["app/layout.jsx"]
        assert "display: flex;" in files["app/globals.css"]

    def test_next_app_styled_registry(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="app", styling="styled-components",
            typescript=True,
        ).source_files()
        assert set(files) == {
            "app/layout.tsx", "app/page.tsx", "app/styled-components-registry.tsx",
        }
        assert "StyledComponentsRegistry" in files["app/layout.tsx"]
        assert "import type { Metadata } from 'next';" in files["app/layout.tsx"]

    def test_next_pages_css(self, renderer):
        files = _generator(renderer, framework="nextjs", nextRouting="pages").source_files()
        assert set(files) == {"pages/_app.jsx", "pages/index.jsx", "styles/globals.css"}
        assert "import '../styles/globals.css';" in files["pages/_app.jsx"]

    def test_next_pages_styled_document(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="pages", styling="styled-components"
        ).source_files()
        assert set(files) == {"pages/_app.jsx", "pages/index.jsx", "pages/_document.jsx"}
        assert "ServerStyleSheet" in files["pages/_document.jsx"]
        assert "globals.css" not in files["pages/_app.jsx"]

    def test_index_html_points_at_entry(self, renderer):
        files = _generator(renderer, framework="vite", typescript=True).source_files()
        assert 'src="/src/main.tsx"' in files["index.html"]

    def test_deterministic(self, renderer, vite_choices):
        first = ContentGenerator(vite_choices, "my-app", renderer).source_files()
        second = ContentGenerator(vite_choices, "my-app", renderer).source_files()
        assert first == second


# ---------------------------------------------------------------------------
# Feature sources
# ---------------------------------------------------------------------------


class TestRouterSources:
    def test_router_files(self, renderer):
        files = _generator(
            renderer, framework="vite", routing="react-router", styling="css"
        ).source_files()
        for path in (
            "src/App.jsx",
            "src/pages/HomePage.jsx",
            "src/pages/AboutPage.jsx",
            "src/pages/NotFoundPage.jsx",
            "src/components/Layout.jsx",
            "src/components/Layout.css",
        ):
            assert path in files

    def test_app_renders_router(self, renderer):
        files = _generator(renderer, framework="vite", routing="react-router").source_files()
        app = files["src/App.jsx"]
        assert "createBrowserRouter" in app
        assert "<RouterProvider router={router} />" in app
        assert "import HomePage from './pages/HomePage';" in app

    def test_home_page_carries_welcome_content(self, renderer):
        files = _generator(
            renderer, framework="vite", routing="react-router", styling="css"
        ).source_files()
        home = files["src/pages/HomePage.jsx"]
        assert "function HomePage()" in home
        assert "export default HomePage;" in home
        assert "import '../App.css';" in home
        assert "src/pages/HomePage.jsx" in home

    def test_layout_stylesheet_only_for_css(self, renderer):
        files = _generator(
            renderer, framework="vite", routing="react-router", styling="tailwind"
        ).source_files()
        assert "src/components/Layout.css" not in files
        assert "<Outlet />" in files["src/components/Layout.jsx"]


class TestStateSources:
    def test_vite_redux(self, renderer):
        files = _generator(
            renderer, framework="vite", stateManagement="redux", typescript=True
        ).source_files()
        assert "export const store = configureStore({" in files["src/store/store.ts"]
        assert "import counterReducer from './counterSlice';" in files["src/store/store.ts"]
        assert "TypedUseSelectorHook<RootState>" in files["src/store/hooks.ts"]
        assert "PayloadAction<number>" in files["src/store/counterSlice.ts"]

        counter = files["src/components/Counter.tsx"]
        assert "import { useAppDispatch, useAppSelector } from '../store/hooks';" in counter
        assert "onClick={() => dispatch(increment())}" in counter
        assert "Redux Toolkit Counter" in counter
        assert "'use client'" not in counter

        app = files["src/App.tsx"]
        assert "import { Counter } from './components/Counter';" in app
        assert "<Counter />" in app

    def test_vite_redux_wraps_app_in_providers(self, renderer):
        files = _generator(renderer, framework="vite", stateManagement="redux").source_files()
        assert "<Provider store={store}>{children}</Provider>" in files["src/providers.jsx"]
        entry = files["src/main.jsx"]
        assert "import Providers from './providers';" in entry
        assert "<Providers>" in entry

    def test_next_zustand_needs_no_providers(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="app", stateManagement="zustand"
        ).source_files()
        assert "export const useCounterStore = create((set) => ({" in files["lib/counterStore.js"]
        counter = files["components/Counter.jsx"]
        assert counter.startswith("'use client';")
        assert "import { useCounterStore } from '../lib/counterStore';" in counter
        assert "import { Counter } from '../components/Counter';" in files["app/page.jsx"]
        assert "app/providers.jsx" not in files
        assert "Providers" not in files["app/layout.jsx"]

    def test_zustand_typescript_store(self, renderer):
        files = _generator(
            renderer, framework="vite", stateManagement="zustand", typescript=True
        ).source_files()
        assert "create<CounterState>()((set) => ({" in files["src/store/counterStore.ts"]
        assert "src/providers.tsx" not in files

    def test_next_app_redux(self, renderer, next_app_choices):
        files = ContentGenerator(next_app_choices, "site", renderer).source_files()
        assert "export const makeStore = () =>" in files["lib/store.ts"]
        assert "import counterReducer from './features/counter/counterSlice';" in files["lib/store.ts"]
        assert "useAppStore: () => AppStore" in files["lib/hooks.ts"]
        assert "lib/features/counter/counterSlice.ts" in files

        providers = files["app/providers.tsx"]
        assert providers.startswith("'use client';")
        assert "import { makeStore } from '../lib/store';" in providers
        assert "storeRef.current = makeStore();" in providers
        assert "<Provider store={storeRef.current}>{children}</Provider>" in providers

        layout = files["app/layout.tsx"]
        assert "import Providers from './providers';" in layout
        assert (
            "<StyledComponentsRegistry><Providers>{children}</Providers></StyledComponentsRegistry>"
            in layout
        )

    def test_next_pages_providers_wrap_component(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="pages",
            stateManagement="redux", api="fetch-react-query",
        ).source_files()
        providers = files["components/Providers.jsx"]
        assert not providers.startswith("'use client';")
        assert "import { useRef, useState } from 'react';" in providers
        assert "from '../lib/api/config/query-client';" in providers
        assert "const [queryClient] = useState(createQueryClient);" in providers
        assert "<QueryClientProvider client={queryClient}>{children}</QueryClientProvider>" in providers

        app = files["pages/_app.jsx"]
        assert "import Providers from '../components/Providers';" in app
        assert "<Component {...pageProps} />" in app
        assert "<Providers>" in app


_API_BASE = {"config/api-client", "services/todo-service", "services/index"}
_QUERY_EXTRA = {"config/query-client", "hooks/use-todos", "hooks/index"}


class TestApiSources:
    @pytest.mark.parametrize(
        "api, react_query",
        [
            ("axios-react-query", True),
            ("axios-only", False),
            ("fetch-react-query", True),
            ("fetch-only", False),
        ],
    )
    @pytest.mark.parametrize(
        "answers, root",
        [
            ({"framework": "vite"}, "src/api"),
            ({"framework": "nextjs", "nextRouting": "app"}, "lib/api"),
        ],
    )
    def test_file_set(self, renderer, api, react_query, answers, root):
        files = _generator(renderer, api=api, **answers).source_files()
        api_files = {
            path[len(root) + 1:].rsplit(".", 1)[0] for path in files if path.startswith(f"{root}/")
        }
        assert api_files == (_API_BASE | _QUERY_EXTRA if react_query else _API_BASE)
        assert ".env" in files and ".env.example" in files

    def test_vite_axios_client(self, renderer):
        files = _generator(renderer, framework="vite", api="axios-only").source_files()
        client = files["src/api/config/api-client.js"]
        assert "axios.create({" in client
        assert "baseURL: import.meta.env.VITE_API_URL," in client
        assert "response.data" in files["src/api/services/todo-service.js"]
        assert "src/providers.jsx" not in files

    def test_next_fetch_client(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="app", api="fetch-only", typescript=True
        ).source_files()
        client = files["lib/api/config/api-client.ts"]
        assert "const API_URL = process.env.NEXT_PUBLIC_API_URL;" in client
        assert "new AbortController()" in client
        assert "options: RequestInit = {}" in client
        service = files["lib/api/services/todo-service.ts"]
        assert "export interface Todo {" in service
        assert "apiClient.get<Todo[]>('/todos')" in service
        assert "response.data" not in service

    def test_env_files(self, renderer):
        vite = _generator(renderer, framework="vite", api="fetch-only").source_files()
        assert vite[".env"] == (
            "# API configuration\n"
            "VITE_API_URL=http://localhost:3001/api\n"
            "VITE_API_TIMEOUT=10000\n"
        )
        assert "VITE_API_URL=\n" in vite[".env.example"]

        nextjs = _generator(renderer, framework="nextjs", api="fetch-only").source_files()
        assert "NEXT_PUBLIC_API_URL=http://localhost:3001/api\n" in nextjs[".env"]

    def test_react_query_provider(self, renderer):
        files = _generator(renderer, framework="vite", api="axios-react-query").source_files()
        providers = files["src/providers.jsx"]
        assert "import { createQueryClient } from './api/config/query-client';" in providers
        assert "const queryClient = createQueryClient();" in providers
        assert "useState" not in providers
        assert "queryKey: TODOS_KEY" in files["src/api/hooks/use-todos.js"]


class TestExampleTest:
    def test_vite_vitest(self, renderer):
        files = _generator(renderer, framework="vite", testing="vitest").source_files()
        test = files["src/__tests__/App.test.jsx"]
        assert test.startswith("import { describe, expect, it } from 'vitest';")
        assert "import App from '../App';" in test
        assert "name: 'React Kickstart'" in test
        assert "name: /count is/" in test
        assert "Providers" not in test

    def test_next_app_jest_with_store(self, renderer, next_app_choices):
        files = ContentGenerator(next_app_choices, "site", renderer).source_files()
        test = files["__tests__/page.test.tsx"]
        assert "from 'vitest'" not in test
        assert "import Home from '../app/page';" in test
        assert "import Providers from '../app/providers';" in test
        assert "name: 'Welcome to Next.js'" in test
        assert "name: 'Get Started'" in test
        assert "name: '+'" in test

    def test_next_pages_subject(self, renderer):
        files = _generator(
            renderer, framework="nextjs", nextRouting="pages", testing="jest"
        ).source_files()
        assert "import Home from '../pages/index';" in files["__tests__/index.test.jsx"]

    def test_router_app_is_the_subject(self, renderer, vite_choices):
        files = ContentGenerator(vite_choices, "my-app", renderer).source_files()
        test = files["src/__tests__/App.test.tsx"]
        assert "import App from '../App';" in test
        assert "import Providers from '../providers';" in test

    def test_no_test_without_runner(self, renderer):
        files = _generator(renderer, framework="vite").source_files()
        assert not any("__tests__" in path for path in files)
