"""Service configuration lookup: serverless.yml / .yaml / .json."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from onboarding.constants import DEFAULT_REGION, DEFAULT_STAGE

logger = logging.getLogger(__name__)

CONFIGURATION_FILENAMES = ("serverless.yml", "serverless.yaml", "serverless.json")


class ServiceConfigError(ValueError):
    """Service configuration file is missing or unreadable."""


def find_configuration_file(service_dir: Path) -> Path | None:
    """Return the first known configuration file in service_dir, or None."""
    for name in CONFIGURATION_FILENAMES:
        candidate = service_dir / name
        if candidate.is_file():
            return candidate
    return None


def load_configuration(path: Path) -> dict[str, Any]:
    """Parse a service configuration file into a dict."""
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ServiceConfigError(f"Cannot read {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ServiceConfigError(f"{path.name} must contain a mapping")
    logger.debug("Loaded service configuration from %s", path)
    return data


def get_provider_name(configuration: dict[str, Any]) -> str | None:
    """Provider name from either `provider: aws` or `provider: {name: aws}`."""
    provider = configuration.get("provider")
    if isinstance(provider, str):
        return provider
    if isinstance(provider, dict):
        name = provider.get("name")
        return name if isinstance(name, str) else None
    return None


def _provider_field(configuration: dict[str, Any], key: str) -> Any:
    provider = configuration.get("provider")
    return provider.get(key) if isinstance(provider, dict) else None


def resolve_stage(configuration: dict[str, Any], options: dict[str, Any]) -> str:
    return options.get("stage") or _provider_field(configuration, "stage") or DEFAULT_STAGE


def resolve_region(configuration: dict[str, Any], options: dict[str, Any]) -> str:
    return options.get("region") or _provider_field(configuration, "region") or DEFAULT_REGION
