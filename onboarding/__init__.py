"""Interactive setup wizard run after a service is scaffolded."""

from onboarding.constants import WIZARD_FAILED, WIZARD_QUIT, WIZARD_SUCCESS

__all__ = ["WIZARD_SUCCESS", "WIZARD_QUIT", "WIZARD_FAILED"]
