"""Command-line entry point.

``kickstart my-app`` runs the interactive wizard; any axis given as a flag
is fixed up front and not asked.  ``--yes`` accepts the default for every
question that is left.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from kickstart import __version__
from kickstart.choices import (
    ApiClient,
    Deployment,
    Editor,
    Framework,
    NextRouting,
    PackageManager,
    Routing,
    SchemaError,
    StateManagement,
    Styling,
    Testing,
)
from kickstart.config import Config
from kickstart.resolver import CatalogError
from kickstart.scaffolder import ConfigIntegrityError, GenerationError, ProjectGenerator
from kickstart.scaffolder.generator import validate_project_name
from kickstart.utils import (
    console,
    create_progress,
    print_error,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_name,
)
from kickstart.wizard import (
    DefaultPrompter,
    NavigationError,
    RichPrompter,
    Wizard,
    WizardCancelled,
    discover_package_managers,
)


def _values(enum: type) -> list[str]:
    return [member.value for member in enum]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kickstart",
        description="kickstart -- scaffold a React project (Vite or Next.js)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  kickstart my-app\n"
            "  kickstart my-app --framework nextjs --next-routing pages --typescript\n"
            "  kickstart my-app --framework vite --styling tailwind --testing vitest --yes\n"
            "  kickstart my-app --yes --dry-run\n"
        ),
    )

    parser.add_argument("project_name", help="Name of the project directory and package")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    axes = parser.add_argument_group("choices", "Answer a wizard question up front")
    axes.add_argument("--package-manager", choices=_values(PackageManager), default=None)
    axes.add_argument("--framework", choices=_values(Framework), default=None)
    axes.add_argument(
        "--next-routing",
        choices=_values(NextRouting),
        default=None,
        help="Next.js router (only with --framework nextjs)",
    )
    axes.add_argument(
        "--routing",
        choices=_values(Routing),
        default=None,
        help="Client-side routing (only with --framework vite)",
    )
    axes.add_argument("--typescript", action=argparse.BooleanOptionalAction, default=None)
    axes.add_argument(
        "--linting",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="ESLint and Prettier",
    )
    axes.add_argument("--styling", choices=_values(Styling), default=None)
    axes.add_argument("--state", choices=_values(StateManagement), default=None)
    axes.add_argument("--api", choices=_values(ApiClient), default=None)
    axes.add_argument("--testing", choices=_values(Testing), default=None)
    axes.add_argument("--deployment", choices=_values(Deployment), default=None)
    axes.add_argument(
        "--git",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Suggest initialising a git repository",
    )
    axes.add_argument(
        "--editor",
        choices=_values(Editor) + ["none"],
        default=None,
        help="Editor to open the project in afterwards ('none' to skip)",
    )

    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept the default answer for every question not given as a flag",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="JSON settings file; KICKSTART_* variables and --output take precedence",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be written without writing them",
    )
    return parser


def seed_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the answers given as flags, keyed like the wizard answers."""
    flags = {
        "packageManager": args.package_manager,
        "framework": args.framework,
        "nextRouting": args.next_routing,
        "routing": args.routing,
        "typescript": args.typescript,
        "linting": args.linting,
        "styling": args.styling,
        "stateManagement": args.state,
        "api": args.api,
        "testing": args.testing,
        "deployment": args.deployment,
        "initGit": args.git,
    }
    seed = {key: value for key, value in flags.items() if value is not None}
    if args.editor == "none":
        seed["openEditor"] = False
    elif args.editor is not None:
        seed["openEditor"] = True
        seed["editor"] = args.editor
    return seed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for ``kickstart`` and ``python -m kickstart``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    project_name = sanitize_name(args.project_name)
    if project_name != args.project_name:
        print_warning(f"Using package name '{project_name}'")
    try:
        validate_project_name(project_name)
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        return 1

    try:
        base = Config.load(Path(args.config).expanduser()) if args.config else None
        config = Config.from_env(base)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: invalid settings: {exc}")
        return 1
    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output).expanduser()})

    prompter = DefaultPrompter() if args.yes else RichPrompter()

    try:
        wizard = Wizard(
            prompter,
            seed=seed_from_args(args),
            package_managers=discover_package_managers(),
            config=config,
        )
        result = wizard.run()
    except WizardCancelled:
        print_error("Cancelled, no files were written.")
        return 1
    except (SchemaError, NavigationError) as exc:
        print_error(f"Error: {exc}")
        return 1

    if not result.completed:
        print_error("The wizard did not finish, no files were written.")
        return 1

    choices = result.choices
    print_summary_table(choices.describe(), title=f"Creating {project_name}")

    try:
        generator = ProjectGenerator(choices, project_name, config)
        if args.dry_run:
            files = generator.plan()
            console.print(f"[bold]Would write {len(files)} files to "
                          f"{config.output_dir / project_name}:[/bold]")
            for rel_path in files:
                console.print(f"  {rel_path}")
            for warning in generator.warnings():
                print_warning(warning)
            return 0

        with create_progress() as progress:
            progress.add_task("Writing project files...", total=None)
            generation = asyncio.run(generator.generate())
    except (GenerationError, CatalogError, ConfigIntegrityError) as exc:
        print_error(f"Error: {exc}")
        return 1

    for warning in generation.warnings:
        print_warning(warning)
    print_success(f"Created {project_name} ({len(generation.files)} files) at {generation.project_path}")
    print_next_steps(generation.next_steps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
