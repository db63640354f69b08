"""Scoped replacement of sys.stdout writes."""

import sys
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TextIO

_active = False


class _WriteOverride:
    """Proxy around a text stream whose write() goes to a replacement callable."""

    def __init__(self, stream: TextIO, write: Callable[[str], Any]) -> None:
        self._stream = stream
        self._write = write

    def write(self, data: str) -> int:
        self._write(data)
        return len(data)

    def writelines(self, lines: Any) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        pass

    def __getattr__(self, name: str) -> Any:
        return getattr(self._stream, name)


@contextmanager
def override_stdout_write(write: Callable[[str], Any]) -> Iterator[Callable[[str], int]]:
    """Route sys.stdout writes to `write` for the duration of the block.

    Yields the original stream's write method so a caller can still reach the
    real terminal. sys.stdout is restored on every exit path. Not reentrant.
    """
    global _active
    if _active:
        raise RuntimeError("stdout write override is already active")

    original = sys.stdout
    _active = True
    sys.stdout = _WriteOverride(original, write)  # type: ignore[assignment]
    try:
        yield original.write
    finally:
        sys.stdout = original
        _active = False
