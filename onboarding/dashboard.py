"""Dashboard integration: engine plugin holding the service instance identity."""

from typing import Any

from core.settings import get_setting, load_settings
from onboarding.service_config import resolve_region, resolve_stage


class DashboardPlugin:
    """Engine plugin registered when the service declares an org.

    Captures what is needed to link to the service instance on the dashboard.
    """

    def __init__(self, engine: Any) -> None:
        configuration = engine.configuration
        options = engine.options
        self.org: str = configuration["org"]
        self.service: str = configuration.get("service", "")
        self.app: str = configuration.get("app") or self.service
        self.stage = resolve_stage(configuration, options)
        self.region = resolve_region(configuration, options)
        self.frontend_url = get_setting(
            load_settings(), "dashboard.frontend_url", "https://app.serverless.com"
        ).rstrip("/")


def get_dashboard_interact_url(dashboard_plugin: DashboardPlugin) -> str:
    """Deep link to the dashboard page for invoking the deployed instance."""
    p = dashboard_plugin
    return f"{p.frontend_url}/{p.org}/apps/{p.app}/{p.service}/{p.stage}/{p.region}/interact"
