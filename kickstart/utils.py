"""Shared console helpers for kickstart.

All user-visible output goes through the module-level rich ``console`` and
the small helpers below: status lines, summary tables, wizard step headers,
the "next steps" panel and a spinner for the write phase.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary project title to a valid npm package name.

    * Lowercases the input.
    * Replaces spaces and characters other than letters, digits, ``.``,
      ``-`` and ``_`` with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens,
      dots and underscores.

    Examples::

        sanitize_name("My Cool App") -> "my-cool-app"
        sanitize_name("  _Dashboard (v2)  ") -> "dashboard-v2"
    """
    result = re.sub(r"[^a-z0-9._-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-._")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step_header(position: int, total: int, title: str) -> None:
    """Print a wizard step header as a full-width rule.

    Args:
        position: 1-based step position.
        total: Total number of visible positions.
        title: Step display title.
    """
    console.print()
    console.print(
        Rule(f"[bold bright_cyan] [{position}/{total}] {title} [/bold bright_cyan]", style="cyan")
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_next_steps(commands: list[str], title: str = "Next steps") -> None:
    """Print the commands the user should run, one per line, in a panel."""
    body = "\n".join(f"[bold]{command}[/bold]" for command in commands)
    console.print(Panel(body, title=title, border_style="green", expand=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich progress spinner for the generation phase.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
