"""Logging setup for the wizard process.

Handlers never write to stdout: the deploy step swaps sys.stdout while the
engine runs, and log records must not leak into (or be eaten by) that region.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _file_handler(cfg: dict[str, Any], level: int) -> logging.Handler:
    log_path = Path(cfg.get("file", "~/.stackwizard/logs/wizard.log")).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=int(cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(cfg.get("backup_count", 2)),
        encoding="utf-8",
    )
    h.setLevel(level)
    return h


def setup_logging(settings: dict[str, Any], *, verbose: bool = False) -> None:
    """Configure the root logger from settings["logging"].

    verbose forces DEBUG level and a console handler on stderr.
    """
    cfg = settings.get("logging", {})
    level_name = "DEBUG" if verbose else str(cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    handlers: list[logging.Handler] = [_file_handler(cfg, level)]
    if verbose or cfg.get("log_to_console", False):
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        handlers.append(console)
    for h in handlers:
        h.setFormatter(formatter)
        root.addHandler(h)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
