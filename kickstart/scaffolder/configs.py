"""Tooling configuration files for generated projects.

``build_config_files`` turns a :class:`~kickstart.choices.ChoiceSchema` into a
:class:`ConfigFileSet`: every framework, TypeScript, Tailwind, test-runner,
lint and deployment config file the project needs, keyed by path relative to
the project root.  Whenever one generated file names another (a test config
pointing at its setup script, ``tsconfig.json`` referencing
``tsconfig.node.json``) the builder records the reference, and
:meth:`ConfigFileSet.verify` checks that every referenced file is present.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kickstart.choices import ChoiceSchema, Deployment, NextRouting, Styling, Testing
from kickstart.scaffolder.manifest import build_command, dump_json, publish_dir


class ConfigIntegrityError(RuntimeError):
    """Raised when a config file references a file the set does not contain."""


# ---------------------------------------------------------------------------
# ConfigFileSet
# ---------------------------------------------------------------------------

class ConfigFileSet(BaseModel):
    """Ordered ``{relative_path: body}`` map plus recorded cross-file references."""

    model_config = ConfigDict(frozen=True)

    files: dict[str, str] = Field(default_factory=dict)
    references: list[tuple[str, str]] = Field(
        default_factory=list,
        description="(config_path, referenced_path) pairs",
    )

    def __contains__(self, path: object) -> bool:
        return path in self.files

    def __getitem__(self, path: str) -> str:
        return self.files[path]

    def __len__(self) -> int:
        return len(self.files)

    def paths(self) -> list[str]:
        return list(self.files)

    def dangling_references(self) -> list[tuple[str, str]]:
        return [(src, dst) for src, dst in self.references if dst not in self.files]

    def verify(self) -> "ConfigFileSet":
        """Check referential integrity.

        Returns:
            ``self``, so the call can be chained.

        Raises:
            ConfigIntegrityError: If any recorded reference points at a path
                missing from the set.
        """
        dangling = self.dangling_references()
        if dangling:
            details = ", ".join(f"{src} -> {dst}" for src, dst in dangling)
            raise ConfigIntegrityError(f"Dangling config references: {details}")
        return self


class _ConfigBuilder:
    """Mutable accumulator used while building a ConfigFileSet."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.references: list[tuple[str, str]] = []

    def add(self, path: str, body: str, *, references: tuple[str, ...] = ()) -> None:
        self.files[path] = body
        self.references.extend((path, ref) for ref in references)

    def add_json(self, path: str, data: dict[str, Any], *, references: tuple[str, ...] = ()) -> None:
        self.add(path, dump_json(data), references=references)

    def build(self) -> ConfigFileSet:
        return ConfigFileSet(files=dict(self.files), references=list(self.references))


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def setup_script_path(choices: ChoiceSchema) -> str:
    """Test setup script shared by the Vitest and Jest configs."""
    return f"src/test/setup.{choices.script_ext}"


def tailwind_content_paths(choices: ChoiceSchema) -> list[str]:
    if choices.is_vite:
        return ["./index.html", "./src/**/*.{js,ts,jsx,tsx}"]
    return [
        "./pages/**/*.{js,ts,jsx,tsx,mdx}",
        "./components/**/*.{js,ts,jsx,tsx,mdx}",
        "./app/**/*.{js,ts,jsx,tsx,mdx}",
    ]


def source_root(choices: ChoiceSchema) -> str:
    """Directory holding the application sources for the framework/router."""
    if choices.is_vite:
        return "./src"
    return "./app" if choices.next_routing is NextRouting.APP else "./pages"


# ---------------------------------------------------------------------------
# Framework configs
# ---------------------------------------------------------------------------

def _vite_config(choices: ChoiceSchema) -> str:
    return """import { fileURLToPath, URL } from 'node:url';
import { defineConfig } from 'vite';
import react from '@vitejs/plugin-react';

export default defineConfig({
  plugins: [react()],
  resolve: {
    alias: {
      '@': fileURLToPath(new URL('./src', import.meta.url)),
    },
  },
  server: {
    open: true,
  },
});
"""


def _next_config(choices: ChoiceSchema) -> str:
    options: dict[str, Any] = {"reactStrictMode": True}
    if choices.styling is Styling.STYLED_COMPONENTS:
        options["compiler"] = {"styledComponents": True}
    if choices.deployment is Deployment.NETLIFY:
        options["output"] = "export"
        options["trailingSlash"] = True
        options["images"] = {"unoptimized": True}
    body = json.dumps(options, indent=2)
    return (
        "/** @type {import('next').NextConfig} */\n"
        f"const nextConfig = {body};\n"
        "\n"
        "module.exports = nextConfig;\n"
    )


# ---------------------------------------------------------------------------
# Language configs
# ---------------------------------------------------------------------------

_BASE_COMPILER_OPTIONS: dict[str, Any] = {
    "target": "ES2020",
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": True,
    "strict": True,
    "noEmit": True,
    "resolveJsonModule": True,
    "isolatedModules": True,
}


def _vite_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            **_BASE_COMPILER_OPTIONS,
            "useDefineForClassFields": True,
            "moduleResolution": "bundler",
            "allowImportingTsExtensions": True,
            "jsx": "react-jsx",
            "noUnusedLocals": True,
            "noUnusedParameters": True,
            "noFallthroughCasesInSwitch": True,
            "paths": {"@/*": ["./src/*"]},
        },
        "include": ["src"],
        "references": [{"path": "./tsconfig.node.json"}],
    }


def _vite_node_tsconfig(tooling_files: list[str]) -> dict[str, Any]:
    return {
        "compilerOptions": {
            "composite": True,
            "skipLibCheck": True,
            "module": "ESNext",
            "moduleResolution": "bundler",
            "allowSyntheticDefaultImports": True,
            "strict": True,
            "noEmit": True,
        },
        "include": tooling_files,
    }


def _next_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            **_BASE_COMPILER_OPTIONS,
            "allowJs": True,
            "esModuleInterop": True,
            "moduleResolution": "node",
            "jsx": "preserve",
            "incremental": True,
            "plugins": [{"name": "next"}],
            "paths": {"@/*": ["./*"]},
        },
        "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
        "exclude": ["node_modules"],
    }


def _jsconfig() -> dict[str, Any]:
    return {"compilerOptions": {"paths": {"@/*": ["./*"]}}}


# ---------------------------------------------------------------------------
# Styling configs
# ---------------------------------------------------------------------------

def _tailwind_config(choices: ChoiceSchema) -> str:
    content = ",\n".join(f"    '{path}'" for path in tailwind_content_paths(choices))
    export = "export default" if choices.is_vite else "module.exports ="
    return (
        "/** @type {import('tailwindcss').Config} */\n"
        f"{export} {{\n"
        "  content: [\n"
        f"{content},\n"
        "  ],\n"
        "  theme: {\n"
        "    extend: {},\n"
        "  },\n"
        "  plugins: [],\n"
        "};\n"
    )


def _postcss_config(choices: ChoiceSchema) -> str:
    export = "export default" if choices.is_vite else "module.exports ="
    return (
        f"{export} {{\n"
        "  plugins: {\n"
        "    tailwindcss: {},\n"
        "    autoprefixer: {},\n"
        "  },\n"
        "};\n"
    )


# ---------------------------------------------------------------------------
# Testing configs
# ---------------------------------------------------------------------------

_SETUP_SCRIPT = """import '@testing-library/jest-dom';

// Global test setup: matchers from jest-dom are available in every test.
"""


def _vitest_config(choices: ChoiceSchema) -> str:
    return f"""import {{ defineConfig }} from 'vitest/config';
import react from '@vitejs/plugin-react';

export default defineConfig({{
  plugins: [react()],
  test: {{
    environment: 'jsdom',
    setupFiles: ['./{setup_script_path(choices)}'],
    globals: true,
  }},
}});
"""


def _next_jest_config(choices: ChoiceSchema) -> str:
    return f"""const nextJest = require('next/jest');

const createJestConfig = nextJest({{
  dir: './',
}});

const customJestConfig = {{
  setupFilesAfterEnv: ['<rootDir>/{setup_script_path(choices)}'],
  testEnvironment: 'jsdom',
  testPathIgnorePatterns: ['<rootDir>/.next/', '<rootDir>/node_modules/'],
}};

module.exports = createJestConfig(customJestConfig);
"""


def _vite_jest_config(choices: ChoiceSchema) -> str:
    extensions = ["js", "jsx", "ts", "tsx", "json"] if choices.typescript else ["js", "jsx", "json"]
    return f"""module.exports = {{
  testEnvironment: 'jsdom',
  setupFilesAfterEnv: ['<rootDir>/{setup_script_path(choices)}'],
  moduleFileExtensions: {json.dumps(extensions)},
  transform: {{
    '^.+\\\\.(js|jsx|ts|tsx)$': 'babel-jest',
  }},
  moduleNameMapper: {{
    '\\\\.(css|less|scss)$': 'identity-obj-proxy',
    '^@/(.*)$': '<rootDir>/src/$1',
  }},
  testMatch: [
    '<rootDir>/src/**/__tests__/**/*.{{js,jsx,ts,tsx}}',
    '<rootDir>/src/**/*.{{test,spec}}.{{js,jsx,ts,tsx}}',
  ],
}};
"""


def _vite_babel_config(choices: ChoiceSchema) -> str:
    presets = [
        "    ['@babel/preset-env', { targets: { node: 'current' } }]",
        "    ['@babel/preset-react', { runtime: 'automatic' }]",
    ]
    if choices.typescript:
        presets.append("    '@babel/preset-typescript'")
    joined = ",\n".join(presets)
    return f"module.exports = {{\n  presets: [\n{joined},\n  ],\n}};\n"


# ---------------------------------------------------------------------------
# Linting configs
# ---------------------------------------------------------------------------

def _eslint_config(choices: ChoiceSchema) -> dict[str, Any]:
    # next/core-web-vitals already registers the react and react-hooks plugins.
    if choices.is_nextjs:
        extends = ["next/core-web-vitals", "eslint:recommended", "plugin:prettier/recommended"]
        plugins = ["prettier"]
    else:
        extends = [
            "eslint:recommended",
            "plugin:react/recommended",
            "plugin:react-hooks/recommended",
            "plugin:prettier/recommended",
        ]
        plugins = ["react", "prettier"]
    config: dict[str, Any] = {
        "root": True,
        "env": {"browser": True, "es2021": True, "node": True},
        "extends": extends,
        "parserOptions": {
            "ecmaFeatures": {"jsx": True},
            "ecmaVersion": "latest",
            "sourceType": "module",
        },
        "settings": {"react": {"version": "detect"}},
        "plugins": plugins,
        "ignorePatterns": ["dist"] if choices.is_vite else [".next", "out"],
        "rules": {
            "react/react-in-jsx-scope": "off",
            "react/prop-types": "off",
        },
    }
    if choices.typescript:
        extends.append("plugin:@typescript-eslint/recommended")
        config["parser"] = "@typescript-eslint/parser"
        plugins.append("@typescript-eslint")
    return config


_PRETTIER_CONFIG: dict[str, Any] = {
    "semi": True,
    "singleQuote": True,
    "tabWidth": 2,
    "trailingComma": "es5",
}


# ---------------------------------------------------------------------------
# Deployment configs
# ---------------------------------------------------------------------------

def _vercel_config(choices: ChoiceSchema) -> dict[str, Any]:
    if choices.is_nextjs:
        return {"framework": "nextjs"}
    return {
        "framework": "vite",
        "buildCommand": build_command(choices),
        "outputDirectory": publish_dir(choices),
        "rewrites": [{"source": "/(.*)", "destination": "/index.html"}],
    }


def _netlify_config(choices: ChoiceSchema) -> str:
    body = (
        "[build]\n"
        f'  command = "{build_command(choices)}"\n'
        f'  publish = "{publish_dir(choices)}"\n'
        "\n"
        "[build.environment]\n"
        '  NODE_VERSION = "20"\n'
    )
    if choices.is_vite:
        body += (
            "\n"
            "[[redirects]]\n"
            '  from = "/*"\n'
            '  to = "/index.html"\n'
            "  status = 200\n"
        )
    return body


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_config_files(choices: ChoiceSchema) -> ConfigFileSet:
    """Build every tooling config file for *choices*.

    Returns:
        A verified ``ConfigFileSet``.

    Raises:
        ConfigIntegrityError: If a generated file references a path that
            was not generated (an internal bug, never a user error).
    """
    builder = _ConfigBuilder()
    ext = choices.script_ext
    tooling_files: list[str] = []

    # Framework
    if choices.is_vite:
        vite_config = f"vite.config.{ext}"
        builder.add(vite_config, _vite_config(choices))
        tooling_files.append(vite_config)
    else:
        builder.add("next.config.js", _next_config(choices))

    # Styling
    if choices.styling is Styling.TAILWIND:
        builder.add("tailwind.config.js", _tailwind_config(choices))
        builder.add(
            "postcss.config.js", _postcss_config(choices), references=("tailwind.config.js",)
        )

    # Testing
    if choices.testing is not Testing.NONE:
        setup = setup_script_path(choices)
        builder.add(setup, _SETUP_SCRIPT)
        if choices.testing is Testing.VITEST:
            vitest_config = f"vitest.config.{ext}"
            builder.add(vitest_config, _vitest_config(choices), references=(setup,))
            tooling_files.append(vitest_config)
        elif choices.is_nextjs:
            builder.add("jest.config.js", _next_jest_config(choices), references=(setup,))
        else:
            builder.add("babel.config.cjs", _vite_babel_config(choices))
            builder.add(
                "jest.config.cjs",
                _vite_jest_config(choices),
                references=(setup, "babel.config.cjs"),
            )

    # Language
    if choices.typescript:
        if choices.is_vite:
            builder.add_json(
                "tsconfig.json", _vite_tsconfig(), references=("tsconfig.node.json",)
            )
            builder.add_json(
                "tsconfig.node.json",
                _vite_node_tsconfig(tooling_files),
                references=tuple(tooling_files),
            )
        else:
            builder.add_json("tsconfig.json", _next_tsconfig())
    elif choices.is_nextjs:
        builder.add_json("jsconfig.json", _jsconfig())

    # Linting
    if choices.linting:
        builder.add_json(".eslintrc.json", _eslint_config(choices), references=(".prettierrc",))
        builder.add_json(".prettierrc", _PRETTIER_CONFIG)

    # Deployment
    if choices.deployment is Deployment.VERCEL:
        builder.add_json("vercel.json", _vercel_config(choices))
    elif choices.deployment is Deployment.NETLIFY:
        builder.add("netlify.toml", _netlify_config(choices))

    return builder.build().verify()


def check_configuration(choices: ChoiceSchema) -> list[str]:
    """Return non-fatal defects in the generated tooling configuration."""
    issues: list[str] = []
    if choices.styling is Styling.TAILWIND:
        paths = tailwind_content_paths(choices)
        root = source_root(choices)
        if not paths:
            issues.append("Tailwind content paths are empty; no classes will be generated.")
        elif not any(path.startswith(root) for path in paths):
            issues.append(f"Tailwind content paths do not scan the source directory '{root}'.")
    if choices.typescript and choices.is_vite and choices.testing is Testing.JEST:
        issues.append(
            "jest.config.cjs transpiles TypeScript with Babel; run `tsc --noEmit` to type-check tests."
        )
    return issues
