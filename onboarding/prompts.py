"""Named prompts. Answers can be pre-seeded by name for non-interactive runs."""

import logging
from typing import Any, Mapping

import questionary

from onboarding.ui import STYLE

logger = logging.getLogger(__name__)


async def confirm(
    message: str,
    *,
    name: str,
    default: bool = True,
    answers: Mapping[str, Any] | None = None,
) -> bool:
    """Ask a yes/no question. Returns False if the user cancelled (Ctrl+C)."""
    if answers and name in answers:
        logger.debug("Prompt %s answered in advance: %s", name, answers[name])
        return bool(answers[name])

    answer = await questionary.confirm(message, default=default, style=STYLE).ask_async()
    if answer is None:
        return False
    return bool(answer)
