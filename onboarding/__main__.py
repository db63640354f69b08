"""Entry point: python -m onboarding, or the stackwizard console script."""

import asyncio
import logging
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv

from core.logging_config import setup_logging
from core.settings import load_settings
from onboarding.constants import WIZARD_FAILED, WIZARD_QUIT, WIZARD_SUCCESS
from onboarding.service_config import (
    ServiceConfigError,
    find_configuration_file,
    load_configuration,
)
from onboarding.state import WizardContext
from onboarding.steps import DeployStep
from onboarding.wizard import run_wizard

logger = logging.getLogger(__name__)

app = typer.Typer(help="Finish setting up a freshly scaffolded service.", add_completion=False)


def run_setup(
    service_dir: Path,
    options: dict[str, Any],
    history: set[str],
    verbose: bool = False,
) -> int:
    """Load the service and run the wizard. Returns an exit code."""
    setup_logging(load_settings(), verbose=verbose)
    service_dir = service_dir.resolve()
    load_dotenv(service_dir / ".env")

    config_path = find_configuration_file(service_dir)
    if config_path is None:
        typer.echo(f"No serverless.yml found in {service_dir}", err=True)
        return WIZARD_FAILED
    try:
        configuration = load_configuration(config_path)
    except ServiceConfigError as e:
        typer.echo(str(e), err=True)
        return WIZARD_FAILED

    context = WizardContext(
        configuration=configuration,
        configuration_filename=config_path.name,
        service_dir=service_dir,
        history=set(history),
        options=options,
    )
    try:
        asyncio.run(run_wizard(context, [DeployStep()]))
    except KeyboardInterrupt:
        typer.echo("\n\nSetup cancelled.")
        return WIZARD_QUIT
    except Exception as e:
        logger.exception("Setup wizard failed")
        typer.echo(f"\nSetup failed: {e}", err=True)
        return WIZARD_FAILED
    return WIZARD_SUCCESS


@app.command()
def main(
    service_dir: Path = typer.Option(
        Path("."), "--service-dir", "-d", help="Directory containing serverless.yml"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Deploy without asking"),
    stage: str | None = typer.Option(None, "--stage", help="Stage used for dashboard lookups"),
    region: str | None = typer.Option(None, "--region", help="Region used for dashboard lookups"),
    executed: list[str] | None = typer.Option(
        None, "--executed", help="Step already run this session (repeatable)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logs on stderr"),
) -> None:
    """Run the setup wizard for the service in --service-dir."""
    options: dict[str, Any] = {"stage": stage, "region": region}
    if yes:
        options["answers"] = {"should_deploy": True}
    code = run_setup(service_dir, options, set(executed or []), verbose=verbose)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
