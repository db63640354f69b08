"""Progress renderer plugin used while the engine's own output is suppressed."""

import shutil
import time
from typing import Any, Callable

from onboarding.service_config import resolve_region, resolve_stage

_CLEAR_LINE = "\r\x1b[K"


def _discard(data: str) -> None:
    pass


class DeployProgress:
    """Single-line progress display written through `write_original_stdout`.

    The writer starts as a no-op; the deploy step points it at the real
    terminal once the engine's stdout is intercepted.
    """

    def __init__(self) -> None:
        self.write_original_stdout: Callable[[str], Any] = _discard
        self._started_at: float | None = None
        self._line_open = False

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def elapsed(self) -> int:
        if self._started_at is None:
            return 0
        return int(time.monotonic() - self._started_at)

    def start(self, text: str) -> None:
        self._started_at = time.monotonic()
        self.write_original_stdout(f"\n{text}\n")

    def update(self, text: str) -> None:
        if not self.is_running:
            return
        width = shutil.get_terminal_size().columns
        status = f"  ({self.elapsed()}s) {text}"
        self.write_original_stdout(_CLEAR_LINE + status[: max(width - 1, 10)])
        self._line_open = True

    def _finish(self, symbol: str, text: str) -> None:
        if not self.is_running:
            return
        if self._line_open:
            self.write_original_stdout(_CLEAR_LINE)
            self._line_open = False
        self.write_original_stdout(f"{symbol} {text} ({self.elapsed()}s)\n")
        self._started_at = None

    def succeed(self, text: str) -> None:
        self._finish("✔", text)

    def fail(self, text: str) -> None:
        self._finish("✖", text)


class InteractiveDeployProgress:
    """Engine plugin rendering deploy progress for the setup wizard."""

    def __init__(self, engine: Any) -> None:
        self.progress = DeployProgress()
        configuration = engine.configuration
        self._service = configuration.get("service", "service")
        self._stage = resolve_stage(configuration, engine.options)
        self._region = resolve_region(configuration, engine.options)
        lifecycle = engine.commands[0]
        self.hooks: dict[str, Callable[..., Any]] = {
            f"before:{lifecycle}": self._on_start,
            f"{lifecycle}:output": self._on_output,
            f"after:{lifecycle}": self._on_finish,
        }

    def _on_start(self) -> None:
        self.progress.start(
            f"Deploying {self._service} to stage {self._stage} ({self._region})"
        )

    def _on_output(self, line: str) -> None:
        if line.strip():
            self.progress.update(line.strip())

    def _on_finish(self) -> None:
        self.progress.succeed("Service deployed")

    def handle_error(self) -> None:
        """Close the progress line with a failure marker."""
        self.progress.fail("Deployment failed")
