"""The selection wizard state machine.

``Wizard.run`` walks the step graph from ``packageManager`` to ``complete``.
Each prompted answer is merged into an immutable ``ChoiceDraft``; the draft
is only turned into a ``ChoiceSchema`` once the terminal state is reached,
so a cancelled run never yields something that looks complete.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from kickstart.choices import ChoiceDraft, ChoiceSchema, PackageManager, field_name
from kickstart.config import Config
from kickstart.wizard.navigator import NavigationHistory
from kickstart.wizard.prompt import Prompter
from kickstart.wizard.steps import (
    BACK,
    COMPLETE,
    FIRST_STEP,
    SKIP,
    STEPS,
    PackageManagerInfo,
    WizardStep,
    editor_step,
    package_manager_step,
    steps_after,
)


class NavigationError(RuntimeError):
    """Raised when a step points at a step name that does not exist."""


class WizardCancelled(Exception):
    """Raised when the user aborts the wizard before it completes."""


@dataclass(frozen=True)
class WizardResult:
    """Outcome of a finished wizard run."""

    choices: ChoiceSchema
    completed: bool = True


class Wizard:
    """Drives one interactive selection session.

    Args:
        prompter: Object that renders a step and returns the selection.
        seed: Answers fixed in advance (e.g. from command-line flags).  Steps
            whose answer is seeded are never prompted.
        package_managers: Managers discovered on the machine; when given,
            the first step only offers the available ones.
        config: User configuration (default package manager).
    """

    def __init__(
        self,
        prompter: Prompter,
        *,
        seed: ChoiceDraft | Mapping[str, Any] | None = None,
        package_managers: Optional[Iterable[PackageManagerInfo]] = None,
        config: Config | None = None,
    ) -> None:
        self.prompter = prompter
        self.config = config or Config()
        if seed is None:
            seed = ChoiceDraft()
        elif not isinstance(seed, ChoiceDraft):
            seed = ChoiceDraft().merge(seed)
        self.draft: ChoiceDraft = seed
        self.seeded: frozenset[str] = frozenset(seed.model_dump(exclude_none=True))
        self.history = NavigationHistory()
        self.completed = False

        if package_managers is None:
            package_managers = [PackageManagerInfo(name=manager) for manager in PackageManager]
        self.steps: dict[str, WizardStep] = dict(STEPS)
        self.steps[FIRST_STEP] = package_manager_step(
            package_managers, self.config.default_package_manager
        )
        self.steps["editor"] = editor_step(self.config.editor)

    # -- Public API --------------------------------------------------------

    def run(self) -> WizardResult:
        """Ask every outstanding question and return the completed choices.

        Raises:
            WizardCancelled: If the prompter is interrupted.
            NavigationError: If a step names an unknown successor.
            SchemaError: If the finished draft is still incomplete.
        """
        self.completed = False
        self.history.reset()
        current = FIRST_STEP

        try:
            while current != COMPLETE:
                current = self._advance(current)
        except (KeyboardInterrupt, EOFError) as exc:
            raise WizardCancelled(f"Cancelled at step '{current}'") from exc

        choices = self.draft.to_schema()
        self.completed = True
        self.history.reset()
        return WizardResult(choices=choices, completed=True)

    def step(self, name: str) -> WizardStep:
        """Look up a step by name.

        Raises:
            NavigationError: If no step has that name.
        """
        try:
            return self.steps[name]
        except KeyError:
            raise NavigationError(f"Unknown wizard step: {name!r}") from None

    def is_seeded(self, step: WizardStep) -> bool:
        return field_name(step.answer_key) in self.seeded

    def clear_answers_after(self, step_name: str) -> None:
        """Drop every non-seeded answer owned by steps after *step_name*."""
        keys = {
            key
            for name in steps_after(step_name)
            for key in self.step(name).keys
            if field_name(key) not in self.seeded
        }
        cleared = [key for key in keys if self.draft.has(key)]
        if cleared:
            self.draft = self.draft.without(cleared)

    # -- Internal helpers --------------------------------------------------

    def _advance(self, current: str) -> str:
        step = self.step(current)

        if not step.visible(self.draft):
            return step.next_step(SKIP, self.draft)

        if self.is_seeded(step):
            return step.next_step(step.answer(self.draft), self.draft)

        options = step.choices(self.draft)
        selection = self.prompter.ask(
            step,
            options,
            step.initial(self.draft),
            can_go_back=self.history.can_go_back(),
            draft=self.draft,
        )

        if selection == BACK:
            previous = self.history.go_back()
            return previous if previous is not None else FIRST_STEP

        previous_answer = step.answer(self.draft)
        self.history.record(step.name)
        self.draft = self.draft.merge(step.delta(selection))
        if previous_answer is not None and previous_answer != selection:
            self.clear_answers_after(step.name)

        for message in step.advisories(selection, self.draft):
            self.prompter.notify(message)

        return step.next_step(selection, self.draft)
