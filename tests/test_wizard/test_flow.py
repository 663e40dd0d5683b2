"""Tests for the wizard state machine (kickstart.wizard.flow).

Covers:
- Complete runs for Vite and Next.js (branching, skipped steps)
- Back navigation: symmetry, skip transparency, default pre-fill
- Clearing downstream answers when a revisited answer changes
- Seeded answers (never prompted, never cleared)
- Cancellation, navigation errors and advisories
"""

from __future__ import annotations

import dataclasses

import pytest

from conftest import DEFAULT, ScriptedPrompter

from kickstart.choices import ChoiceDraft, Framework, SchemaError
from kickstart.config import Config
from kickstart.wizard import (
    BACK,
    STEPS,
    DefaultPrompter,
    NavigationError,
    Wizard,
    WizardCancelled,
    WizardResult,
)


pytestmark = pytest.mark.unit


VITE_SCRIPT = [
    "npm",                # packageManager
    "vite",               # framework
    "react-router",       # routing
    True,                 # language
    True,                 # codeQuality
    "tailwind",           # styling
    "zustand",            # stateManagement
    "axios-react-query",  # api
    "vitest",             # testing
    "netlify",            # deployment
    True,                 # git
    "none",               # editor
]


def _defaults(count: int) -> list:
    return [DEFAULT] * count


# ---------------------------------------------------------------------------
# Complete runs
# ---------------------------------------------------------------------------


class TestCompleteRuns:
    def test_vite_run(self, vite_choices):
        prompter = ScriptedPrompter(VITE_SCRIPT)
        wizard = Wizard(prompter)
        result = wizard.run()

        assert isinstance(result, WizardResult)
        assert result.completed
        assert wizard.completed
        assert result.choices == vite_choices
        assert "nextjsOptions" not in prompter.asked
        assert len(prompter.asked) == 12
        assert prompter.remaining == 0

    def test_nextjs_visits_router_step_not_routing(self):
        prompter = ScriptedPrompter(["yarn", "nextjs", "pages"] + _defaults(9))
        result = Wizard(prompter).run()

        assert "nextjsOptions" in prompter.asked
        assert "routing" not in prompter.asked
        assert result.choices.framework is Framework.NEXTJS
        assert result.choices.next_routing.value == "pages"
        assert result.choices.routing is None

    def test_defaults_follow_framework(self):
        result = Wizard(DefaultPrompter(), seed={"framework": "nextjs"}).run()
        choices = result.choices
        assert choices.next_routing.value == "app"
        assert choices.testing.value == "jest"
        assert choices.deployment.value == "vercel"
        assert choices.styling.value == "tailwind"
        assert choices.linting is True
        assert choices.typescript is False
        assert choices.init_git is True
        assert choices.open_editor is False

    def test_config_default_package_manager(self):
        config = Config(default_package_manager="yarn")
        result = Wizard(DefaultPrompter(), config=config).run()
        assert result.choices.package_manager.value == "yarn"

    def test_editor_selection(self):
        script = VITE_SCRIPT[:-1] + ["cursor"]
        result = Wizard(ScriptedPrompter(script)).run()
        assert result.choices.open_editor is True
        assert result.choices.editor.value == "cursor"

    def test_history_discarded_after_completion(self):
        wizard = Wizard(ScriptedPrompter(VITE_SCRIPT))
        wizard.run()
        assert wizard.history.depth() == 0


# ---------------------------------------------------------------------------
# Back navigation
# ---------------------------------------------------------------------------


class TestBackNavigation:
    def test_back_returns_to_previous_step(self):
        prompter = ScriptedPrompter(["npm", "vite", BACK, "vite"] + _defaults(10))
        Wizard(prompter).run()
        assert prompter.asked[:4] == ["packageManager", "framework", "routing", "framework"]

    def test_revisited_step_defaults_to_previous_answer(self):
        prompter = ScriptedPrompter(["npm", "vite", "none", BACK, DEFAULT] + _defaults(9))
        result = Wizard(prompter).run()
        # routing answered "none", back from language, routing asked again
        assert prompter.asked[4] == "routing"
        assert prompter.defaults[4] == "none"
        assert result.choices.routing.value == "none"

    def test_back_from_language_on_nextjs_returns_to_router_step(self):
        prompter = ScriptedPrompter(["npm", "nextjs", "app", BACK, DEFAULT] + _defaults(9))
        result = Wizard(prompter).run()

        assert prompter.asked[3] == "language"
        assert prompter.asked[4] == "nextjsOptions"
        assert prompter.defaults[4] == "app"
        assert "routing" not in prompter.asked
        assert result.choices.next_routing.value == "app"
        assert prompter.remaining == 0

    def test_symmetry_returns_to_first_step_with_empty_history(self):
        prompter = ScriptedPrompter(["npm", "vite", "none", BACK, BACK, BACK])
        wizard = Wizard(prompter)
        with pytest.raises(WizardCancelled):
            wizard.run()

        assert prompter.asked == [
            "packageManager", "framework", "routing", "language",
            "routing", "framework", "packageManager",
        ]
        assert wizard.history.depth() == 0
        assert not wizard.completed

    def test_go_back_not_offered_on_first_step(self):
        with pytest.raises(ValueError, match="Cannot go back"):
            Wizard(ScriptedPrompter([BACK])).run()

    def test_back_skips_seeded_step(self):
        # styling is seeded, so going back from stateManagement lands on codeQuality
        prompter = ScriptedPrompter(
            ["npm", "vite", "none", False, True, BACK, DEFAULT] + _defaults(6)
        )
        result = Wizard(prompter, seed={"styling": "css"}).run()
        assert "styling" not in prompter.asked
        assert prompter.asked[5:7] == ["stateManagement", "codeQuality"]
        assert result.choices.styling.value == "css"

    def test_invisible_step_is_skipped_without_history(self):
        wizard = Wizard(ScriptedPrompter())
        wizard.draft = ChoiceDraft().merge({"framework": "nextjs"})
        assert wizard._advance("routing") == "language"
        assert wizard.history.depth() == 0

    def test_answers_survive_going_back(self):
        prompter = ScriptedPrompter(
            ["npm", "vite", "react-router", True, BACK, BACK, DEFAULT, DEFAULT] + _defaults(8)
        )
        result = Wizard(prompter).run()
        assert result.choices.routing.value == "react-router"
        assert result.choices.typescript is True


# ---------------------------------------------------------------------------
# Downstream answers
# ---------------------------------------------------------------------------


class TestDownstreamAnswers:
    def _back_to_framework(self) -> list:
        # npm, vite, react-router, TypeScript, then back from codeQuality to framework
        return ["npm", "vite", "react-router", True, BACK, BACK, BACK]

    def test_changing_framework_clears_downstream(self):
        prompter = ScriptedPrompter(self._back_to_framework() + ["nextjs", "pages"] + _defaults(9))
        result = Wizard(prompter).run()

        language_prompts = [i for i, name in enumerate(prompter.asked) if name == "language"]
        assert prompter.defaults[language_prompts[-1]] is False
        assert result.choices.typescript is False
        assert result.choices.routing is None
        assert result.choices.next_routing.value == "pages"

    def test_same_answer_keeps_downstream(self):
        prompter = ScriptedPrompter(self._back_to_framework() + ["vite"] + _defaults(10))
        result = Wizard(prompter).run()
        assert result.choices.typescript is True
        assert result.choices.routing.value == "react-router"

    def test_clear_answers_after(self):
        wizard = Wizard(ScriptedPrompter(), seed={"testing": "jest"})
        wizard.draft = wizard.draft.merge(
            {"framework": "vite", "styling": "css", "openEditor": True, "editor": "cursor"}
        )
        wizard.clear_answers_after("framework")
        assert wizard.draft.framework is Framework.VITE
        assert wizard.draft.styling is None
        assert wizard.draft.open_editor is None
        assert wizard.draft.editor is None
        assert wizard.draft.testing.value == "jest"


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class TestSeeding:
    def test_fully_seeded_asks_nothing(self, vite_answers, vite_choices):
        prompter = ScriptedPrompter()
        result = Wizard(prompter, seed=vite_answers).run()
        assert prompter.asked == []
        assert result.choices == vite_choices

    def test_seeded_draft_instance(self, next_app_choices):
        prompter = ScriptedPrompter()
        result = Wizard(prompter, seed=ChoiceDraft.from_schema(next_app_choices)).run()
        assert result.choices == next_app_choices

    def test_seeded_steps_not_prompted(self):
        prompter = ScriptedPrompter(_defaults(10))
        Wizard(prompter, seed={"framework": "nextjs", "typescript": True}).run()
        assert "framework" not in prompter.asked
        assert "language" not in prompter.asked

    def test_seeded_answer_survives_framework_change(self):
        prompter = ScriptedPrompter(
            ["npm", "vite", "none", BACK, BACK, "nextjs", "app"] + _defaults(8)
        )
        result = Wizard(prompter, seed={"styling": "css"}).run()
        assert result.choices.is_nextjs
        assert result.choices.styling.value == "css"

    def test_conflicting_seed(self):
        with pytest.raises(SchemaError):
            Wizard(ScriptedPrompter(), seed={"framework": "vite", "nextRouting": "app"})


# ---------------------------------------------------------------------------
# Failure modes
# ---------------------------------------------------------------------------


class _InterruptingPrompter(ScriptedPrompter):
    def ask(self, step, options, default, *, can_go_back, draft):
        if step.name == "styling":
            raise KeyboardInterrupt
        return super().ask(step, options, default, can_go_back=can_go_back, draft=draft)


class TestFailureModes:
    def test_exhausted_script_cancels(self):
        wizard = Wizard(ScriptedPrompter(["npm"]))
        with pytest.raises(WizardCancelled, match="framework"):
            wizard.run()
        assert not wizard.completed

    def test_keyboard_interrupt_cancels(self):
        wizard = Wizard(_InterruptingPrompter(_defaults(12)))
        with pytest.raises(WizardCancelled, match="styling"):
            wizard.run()
        assert not wizard.completed
        assert not wizard.draft.complete()

    def test_unknown_step_is_navigation_error(self):
        wizard = Wizard(DefaultPrompter())
        wizard.steps["git"] = dataclasses.replace(
            STEPS["git"], next_step=lambda selection, draft: "nowhere"
        )
        with pytest.raises(NavigationError, match="nowhere"):
            wizard.run()

    def test_invalid_scripted_selection(self):
        with pytest.raises(ValueError, match="not a choice"):
            Wizard(ScriptedPrompter(["pnpm"])).run()


class TestAdvisories:
    def test_jest_on_vite_notifies(self):
        script = VITE_SCRIPT[:8] + ["jest"] + VITE_SCRIPT[9:]
        prompter = ScriptedPrompter(script)
        Wizard(prompter).run()
        assert len(prompter.notes) == 1
        assert "Vitest" in prompter.notes[0]

    def test_recommended_choices_are_quiet(self):
        prompter = ScriptedPrompter(VITE_SCRIPT)
        Wizard(prompter).run()
        assert prompter.notes == []
