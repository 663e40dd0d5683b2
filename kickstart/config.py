"""kickstart runtime configuration.

Centralised, typed settings for the scaffolder. All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from kickstart.choices import Editor, PackageManager
from kickstart.resolver.catalog import VersionCatalog, default_catalog


class Config(BaseModel):
    """Global kickstart configuration.

    Holds the tuneable parameters used by the wizard and the generator.
    Instances are typically created once by the CLI entry point and then
    passed through the rest of the system.
    """

    output_dir: Path = Field(default=Path("."), description="Parent directory for new projects")
    default_package_manager: PackageManager = Field(
        default=PackageManager.NPM,
        description="Package manager pre-selected in the first wizard step",
    )
    version_catalog: Optional[Path] = Field(
        default=None,
        description="Alternative versions.json; the bundled catalog is used when unset",
    )
    editor: Editor = Field(default=Editor.VSCODE, description="Editor offered in the last step")

    @field_validator("output_dir", "version_catalog", mode="before")
    @classmethod
    def _expand_user(cls, value: object) -> object:
        if isinstance(value, (str, Path)) and str(value):
            return Path(value).expanduser()
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def catalog(self) -> VersionCatalog:
        """Return the version catalog these settings point at."""
        if self.version_catalog is None:
            return default_catalog()
        return VersionCatalog.load(self.version_catalog)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load settings from a JSON file such as ``{"output_dir": "~/code"}``.

        Keys missing from the file keep their defaults.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, base: Optional["Config"] = None) -> "Config":
        """Build a ``Config`` from environment variables.

        Variables that are set override the values of *base* (or the
        defaults when no base is given).

        Recognised variables (all optional):
            KICKSTART_OUTPUT_DIR, KICKSTART_PACKAGE_MANAGER,
            KICKSTART_VERSION_CATALOG, KICKSTART_EDITOR.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("KICKSTART_OUTPUT_DIR"):
            kwargs["output_dir"] = os.environ["KICKSTART_OUTPUT_DIR"]
        if os.environ.get("KICKSTART_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["KICKSTART_PACKAGE_MANAGER"]
        if os.environ.get("KICKSTART_VERSION_CATALOG"):
            kwargs["version_catalog"] = os.environ["KICKSTART_VERSION_CATALOG"]
        if os.environ.get("KICKSTART_EDITOR"):
            kwargs["editor"] = os.environ["KICKSTART_EDITOR"]
        values = base.model_dump() if base is not None else {}
        values.update(kwargs)
        return cls(**values)
