"""Credential sources consulted before offering a deploy.

Two authentication paths are supported: local AWS credentials discovered the
way the AWS SDK discovers them, and a provider linked to the project's org on
the dashboard side.
"""

import logging
from typing import Any, Protocol, runtime_checkable

import boto3
import httpx
from botocore.exceptions import BotoCoreError

from core import secrets
from core.settings import get_setting
from onboarding.service_config import resolve_region, resolve_stage

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialSource(Protocol):
    """Contract for the credential checks the deploy step relies on."""

    def has_local_credentials(self) -> bool:
        """True when local AWS credentials are discoverable."""

    def is_authenticated(self) -> bool:
        """True when the session holds a dashboard access key."""

    async def has_linked_provider(
        self, configuration: dict[str, Any], options: dict[str, Any]
    ) -> bool:
        """True when the org has a provider linked for this service instance."""


class DefaultCredentialSource:
    """boto3 credential chain, keyring-stored access key, dashboard providers API."""

    def __init__(self, settings: dict[str, Any]) -> None:
        self._api_url = get_setting(settings, "dashboard.api_url", "").rstrip("/")
        self._access_key_name = get_setting(
            settings, "dashboard.access_key_secret", "SERVERLESS_ACCESS_KEY"
        )
        self._timeout = float(get_setting(settings, "dashboard.timeout", 10.0))

    def has_local_credentials(self) -> bool:
        try:
            credentials = boto3.Session().get_credentials()
        except BotoCoreError as e:
            # e.g. AWS_PROFILE names a profile that does not exist
            logger.debug("AWS credential discovery failed: %s", e)
            return False
        return credentials is not None

    def _access_key(self) -> str | None:
        return secrets.get_secret(self._access_key_name)

    def is_authenticated(self) -> bool:
        return bool(self._access_key())

    async def has_linked_provider(
        self, configuration: dict[str, Any], options: dict[str, Any]
    ) -> bool:
        """Query the dashboard for providers linked to this service instance.

        HTTP and transport errors propagate to the caller.
        """
        org = configuration["org"]
        service = configuration.get("service")
        params = {
            "app": configuration.get("app") or service,
            "service": service,
            "stage": resolve_stage(configuration, options),
            "region": resolve_region(configuration, options),
        }
        url = f"{self._api_url}/orgs/{org}/providers"
        headers = {"Authorization": f"Bearer {self._access_key()}"}
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.get(url, params=params, headers=headers)
            resp.raise_for_status()
            providers = resp.json().get("providers") or []
        logger.debug("Org %s has %d linked provider(s)", org, len(providers))
        return bool(providers)
