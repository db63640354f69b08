"""Exit codes and step identifiers for the setup wizard."""

WIZARD_SUCCESS = 0  # All applicable steps finished
WIZARD_QUIT = 1  # User cancelled (Ctrl+C)
WIZARD_FAILED = 2  # A step raised; error printed to stderr

# Step names recorded in WizardContext.history
AWS_CREDENTIALS_STEP = "aws_credentials"
DEPLOY_STEP = "deploy"

SUPPORTED_PROVIDER = "aws"
DEFAULT_STAGE = "dev"
DEFAULT_REGION = "us-east-1"
