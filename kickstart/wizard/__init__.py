"""kickstart wizard -- collects a ChoiceSchema one question at a time.

Quick usage::

    from kickstart.wizard import RichPrompter, Wizard

    result = Wizard(RichPrompter(), seed={"framework": "vite"}).run()
    if result.completed:
        print(result.choices.describe())
"""

from kickstart.wizard.flow import NavigationError, Wizard, WizardCancelled, WizardResult
from kickstart.wizard.navigator import NavigationHistory
from kickstart.wizard.prompt import DefaultPrompter, Prompter, RichPrompter
from kickstart.wizard.steps import (
    BACK,
    COMPLETE,
    FIRST_STEP,
    SKIP,
    STEP_ORDER,
    STEPS,
    Choice,
    PackageManagerInfo,
    WizardStep,
    discover_package_managers,
)

__all__ = [
    "BACK",
    "COMPLETE",
    "FIRST_STEP",
    "SKIP",
    "STEP_ORDER",
    "STEPS",
    "Choice",
    "DefaultPrompter",
    "NavigationError",
    "NavigationHistory",
    "PackageManagerInfo",
    "Prompter",
    "RichPrompter",
    "Wizard",
    "WizardCancelled",
    "WizardResult",
    "WizardStep",
    "discover_package_managers",
]
