"""Setup wizard orchestration."""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

from onboarding.state import WizardContext

logger = logging.getLogger(__name__)


@runtime_checkable
class WizardStep(Protocol):
    """One conditionally applicable stage of the setup wizard."""

    name: str

    async def is_applicable(self, context: WizardContext) -> bool: ...

    async def run(self, context: WizardContext) -> Any: ...


@dataclass
class WizardResult:
    """Result of running the wizard."""

    executed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    outcomes: dict[str, Any] = field(default_factory=dict)


async def run_wizard(context: WizardContext, steps: Sequence[WizardStep]) -> WizardResult:
    """Run steps strictly in order, skipping those that are not applicable.

    Errors from a step (including from its applicability check) propagate and
    end the wizard.
    """
    result = WizardResult()
    for step in steps:
        if not await step.is_applicable(context):
            logger.debug("Step %s not applicable, skipping", step.name)
            result.skipped.append(step.name)
            continue

        logger.info("Running step %s", step.name)
        result.outcomes[step.name] = await step.run(context)
        context.history.add(step.name)
        result.executed.append(step.name)
    return result
