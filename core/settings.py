"""Load wizard settings from settings.yaml.

Lookup order for the config directory: explicit argument, $STACKWIZARD_CONFIG_DIR,
~/.stackwizard. Missing or unreadable files leave the defaults in place.
"""

import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULTS: dict[str, Any] = {
    "dashboard": {
        "api_url": "https://api.serverless.com/core",
        "frontend_url": "https://app.serverless.com",
        "access_key_secret": "SERVERLESS_ACCESS_KEY",
        "timeout": 10.0,
    },
    "deploy": {
        # Executable plus leading arguments; the engine appends its commands.
        "command": ["serverless"],
    },
    "logging": {
        "file": "~/.stackwizard/logs/wizard.log",
        "level": "INFO",
        "log_to_console": False,
        "max_bytes": 5242880,  # 5 MB
        "backup_count": 2,
    },
}

_cached: dict[str, Any] | None = None


def _default_config_dir() -> Path:
    env_dir = os.environ.get("STACKWIZARD_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".stackwizard"


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge overlay into base recursively. Mutates base."""
    for key, value in overlay.items():
        if value is None:
            continue
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def get_setting(settings: dict[str, Any], path: str, default: Any = None) -> Any:
    """Get a nested value by dot path (e.g. 'dashboard.api_url')."""
    current: Any = settings
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def reload_settings() -> None:
    """Clear the settings cache. Tests call this between cases."""
    global _cached
    _cached = None


def load_settings(config_dir: Path | None = None) -> dict[str, Any]:
    """Load settings.yaml from config_dir. Returns merged defaults + file values."""
    global _cached
    if _cached is not None:
        return _cached

    if config_dir is None:
        config_dir = _default_config_dir()
    path = config_dir / "settings.yaml"

    result: dict[str, Any] = {k: _deep_copy_nested(v) for k, v in _DEFAULTS.items()}

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                _deep_merge(result, data)
        except (yaml.YAMLError, OSError):
            pass

    _cached = result
    return result


def _deep_copy_nested(obj: Any) -> Any:
    """Return a deep copy of nested dicts/lists for defaults."""
    if isinstance(obj, dict):
        return {k: _deep_copy_nested(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_deep_copy_nested(x) for x in obj]
    return obj
