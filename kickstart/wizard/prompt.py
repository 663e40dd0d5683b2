"""Prompt rendering for the selection wizard.

The wizard talks to the user through a :class:`Prompter`.  ``RichPrompter``
is the interactive terminal implementation; ``DefaultPrompter`` accepts every
default (``--yes``).
"""

from __future__ import annotations

from typing import Any, Protocol

from rich.prompt import IntPrompt

from kickstart.choices import ChoiceDraft
from kickstart.utils import console, print_step_header, print_summary_table, print_warning
from kickstart.wizard.steps import BACK, Choice, WizardStep

GO_BACK_LABEL = "Go back"


class Prompter(Protocol):
    """What the wizard needs from a user interface."""

    def ask(
        self,
        step: WizardStep,
        options: list[Choice],
        default: Any,
        *,
        can_go_back: bool,
        draft: ChoiceDraft,
    ) -> Any:
        """Return one of ``options``' values, or ``BACK``."""
        ...

    def notify(self, message: str) -> None:
        ...


# ---------------------------------------------------------------------------
# Interactive
# ---------------------------------------------------------------------------


class RichPrompter:
    """Numbered-list prompts drawn with rich."""

    def __init__(self, show_summary: bool = True) -> None:
        self.show_summary = show_summary

    def ask(
        self,
        step: WizardStep,
        options: list[Choice],
        default: Any,
        *,
        can_go_back: bool,
        draft: ChoiceDraft,
    ) -> Any:
        if self.show_summary and not draft.is_empty():
            print_summary_table(
                {key: str(value) for key, value in draft.answers().items()},
                title="Your selections so far",
            )
        print_step_header(step.position, step.total, step.title)
        console.print(f"[bold]{step.message}[/bold]")

        values = [option.value for option in options]
        for index, option in enumerate(options, start=1):
            line = f"  [cyan]{index}.[/cyan] {option.label}"
            if option.description:
                line += f" [dim]- {option.description}[/dim]"
            console.print(line)
        if can_go_back:
            console.print(f"  [cyan]{len(options) + 1}.[/cyan] [dim]{GO_BACK_LABEL}[/dim]")
            values.append(BACK)

        default_index = values.index(default) + 1 if default in values else 1
        picked = IntPrompt.ask(
            "Select",
            console=console,
            choices=[str(number) for number in range(1, len(values) + 1)],
            default=default_index,
            show_choices=False,
        )
        return values[picked - 1]

    def notify(self, message: str) -> None:
        print_warning(message)


# ---------------------------------------------------------------------------
# Non-interactive
# ---------------------------------------------------------------------------


class DefaultPrompter:
    """Accepts the pre-selected value of every step."""

    def ask(
        self,
        step: WizardStep,
        options: list[Choice],
        default: Any,
        *,
        can_go_back: bool,
        draft: ChoiceDraft,
    ) -> Any:
        return default

    def notify(self, message: str) -> None:
        print_warning(message)

