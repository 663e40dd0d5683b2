"""kickstart scaffolder -- turns a ChoiceSchema into a project directory.

Quick usage::

    from kickstart.choices import ChoiceSchema
    from kickstart.scaffolder import ProjectGenerator

    choices = ChoiceSchema(framework="vite", typescript=True, styling="tailwind")
    generator = ProjectGenerator(choices, "my-app")
    result = await generator.generate("/tmp/output")
"""

from kickstart.scaffolder.configs import (
    ConfigFileSet,
    ConfigIntegrityError,
    build_config_files,
    check_configuration,
)
from kickstart.scaffolder.content import ContentGenerator
from kickstart.scaffolder.generator import GenerationError, GenerationResult, ProjectGenerator
from kickstart.scaffolder.manifest import build_package_json
from kickstart.scaffolder.templates import TemplateRenderer

__all__ = [
    "ConfigFileSet",
    "ConfigIntegrityError",
    "ContentGenerator",
    "GenerationError",
    "GenerationResult",
    "ProjectGenerator",
    "TemplateRenderer",
    "build_config_files",
    "build_package_json",
    "check_configuration",
]
