"""Deploy step: offer to deploy the freshly scaffolded service.

Runs only when the wizard can reasonably expect to authenticate against AWS.
The engine's own console output is suppressed while it runs; an
InteractiveDeployProgress plugin renders progress to the real terminal
instead.
"""

import logging
import sys
from enum import Enum
from typing import Awaitable, Callable

from core.settings import load_settings
from core.stdout import override_stdout_write
from onboarding.constants import AWS_CREDENTIALS_STEP, DEPLOY_STEP, SUPPORTED_PROVIDER
from onboarding.credentials import CredentialSource, DefaultCredentialSource
from onboarding.dashboard import get_dashboard_interact_url
from onboarding.deploy_progress import InteractiveDeployProgress
from onboarding.engine import DeployEngine, ServerlessEngine
from onboarding.messages import print_deploy_message
from onboarding.prompts import confirm
from onboarding.service_config import get_provider_name
from onboarding.state import WizardContext

logger = logging.getLogger(__name__)

ConfirmFn = Callable[..., Awaitable[bool]]
EngineFactory = Callable[..., DeployEngine]


class DeployOutcome(Enum):
    DECLINED = "declined"
    COMPLETED = "completed"


def _suppress(data: str) -> None:
    pass


class DeployStep:
    """Wizard step that deploys the service through the deployment engine."""

    name = DEPLOY_STEP

    def __init__(
        self,
        credentials: CredentialSource | None = None,
        engine_factory: EngineFactory = ServerlessEngine,
        confirm_fn: ConfirmFn = confirm,
        print_message: Callable[..., None] = print_deploy_message,
    ) -> None:
        self._credentials = credentials
        self._engine_factory = engine_factory
        self._confirm = confirm_fn
        self._print_message = print_message

    @property
    def credentials(self) -> CredentialSource:
        if self._credentials is None:
            self._credentials = DefaultCredentialSource(load_settings())
        return self._credentials

    async def is_applicable(self, context: WizardContext) -> bool:
        """Whether offering a deploy makes sense for this service and session."""
        if not context.service_dir:
            return False

        if get_provider_name(context.configuration) != SUPPORTED_PROVIDER:
            return False

        # No credentials step this session: credentials were already in place.
        if AWS_CREDENTIALS_STEP not in context.history:
            return True

        credentials = self.credentials
        if (
            context.configuration.get("org")
            and credentials.is_authenticated()
            and await credentials.has_linked_provider(context.configuration, context.options)
        ):
            return True

        if credentials.has_local_credentials():
            return True

        logger.info("Skipping deploy: no usable AWS credentials")
        return False

    async def run(self, context: WizardContext) -> DeployOutcome:
        configuration = context.configuration
        service_name = configuration.get("service", "")
        is_configured_with_dashboard = bool(configuration.get("org"))

        answers = context.options.get("answers")
        if not await self._confirm(
            "Do you want to deploy your project?", name="should_deploy", answers=answers
        ):
            self._print_message(service_name, False, is_configured_with_dashboard)
            return DeployOutcome.DECLINED

        engine = self._engine_factory(
            configuration=configuration,
            service_dir=context.service_dir,
            configuration_filename=context.configuration_filename,
            is_configuration_resolved=True,
            has_resolved_commands_externally=True,
            is_telemetry_reported_externally=True,
            commands=["deploy"],
            options={},
        )

        progress_plugin: InteractiveDeployProgress | None = None
        try:
            with override_stdout_write(_suppress) as original_write:
                await engine.init()
                # Registration must follow init() and precede run().
                progress_plugin = engine.plugin_manager.add_plugin(InteractiveDeployProgress)
                progress_plugin.progress.write_original_stdout = original_write
                await engine.run()
        except BaseException as err:
            self._report_failure(progress_plugin, err)
            raise

        dashboard_url = None
        if is_configured_with_dashboard:
            dashboard_url = get_dashboard_interact_url(engine.plugin_manager.dashboard_plugin)
        self._print_message(service_name, True, is_configured_with_dashboard, dashboard_url)
        return DeployOutcome.COMPLETED

    @staticmethod
    def _report_failure(
        progress_plugin: InteractiveDeployProgress | None, err: BaseException
    ) -> None:
        """Let the progress renderer show the failure. Never raises."""
        if progress_plugin is None:
            # Engine failed in init(), before any progress was shown.
            logger.error("Deploy failed during engine initialization: %s", err)
            sys.stderr.write(f"\nDeployment could not start: {err}\n")
            return
        try:
            progress_plugin.handle_error()
        except Exception:
            logger.exception("Progress plugin failed while reporting a deploy error")


__all__ = ["DeployStep", "DeployOutcome"]
