"""Shared wizard context."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class WizardContext:
    """State the wizard runner hands to every step.

    configuration is the resolved service descriptor and is never mutated by
    steps. history holds the names of steps already run this session; only the
    runner appends to it.
    """

    configuration: dict[str, Any]
    configuration_filename: str | None
    service_dir: Path | None
    history: set[str] = field(default_factory=set)
    options: dict[str, Any] = field(default_factory=dict)
