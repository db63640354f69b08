"""Setup wizard steps."""

from onboarding.steps.deploy_step import DeployOutcome, DeployStep

__all__ = ["DeployStep", "DeployOutcome"]
