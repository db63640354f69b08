"""Tests for onboarding.messages."""

from unittest.mock import patch

from prompt_toolkit.formatted_text import fragment_list_to_text

from onboarding.messages import compose_deploy_message, print_deploy_message

URL = "https://app.serverless.com/acme/apps/app/svc/dev/us-east-1/interact"


def _text(*args, **kwargs) -> str:
    return fragment_list_to_text(compose_deploy_message(*args, **kwargs))


def test_deployed_with_dashboard() -> None:
    assert _text("svc", True, True, URL) == "\n".join([
        "\nYour project is live and available in ./svc",
        "\n  Run serverless info in the project directory",
        "    View your endpoints and services",
        f"\n  Open {URL}",
        "    Invoke your functions and view logs in the dashboard",
        "\n  Run serverless deploy in the project directory",
        "    Redeploy your service after you've updated your service code or configuration\n\n",
    ])


def test_not_deployed_with_dashboard() -> None:
    assert _text("svc", False, True) == "\n".join([
        "\nYour project is ready for deployment and available in ./svc",
        "\n  Run serverless deploy in the project directory",
        "    Deploy your newly created service",
        "\n  Run serverless info in the project directory after deployment",
        "    View your endpoints and services",
        "\n  Open Serverless Dashboard after deployment",
        "    Invoke your functions and view logs in the dashboard\n\n",
    ])


def test_deployed_without_dashboard() -> None:
    assert _text("svc", True, False) == "\n".join([
        "\nYour project is live and available in ./svc",
        "\n  Run serverless info in the project directory",
        "    View your endpoints and services",
        "\n  Run serverless deploy in the directory",
        "    Redeploy your service after you've updated your service code or configuration",
        "\n  Run serverless invoke and serverless logs in the project directory",
        "    Invoke your functions directly and view the logs",
        "\n  Run serverless in the project directory",
        "    Add metrics, alerts, and a log explorer, by enabling the dashboard functionality\n\n",
    ])


def test_not_deployed_without_dashboard() -> None:
    assert _text("svc", False, False) == "\n".join([
        "\nYour project is ready for deployment and available in ./svc",
        "\n  Run serverless deploy in the project directory",
        "    Deploy your newly created service",
        "\n  Run serverless info in the project directory after deployment",
        "    View your endpoints and services",
        "\n  Run serverless invoke and serverless logs in the project directory after deployment",
        "    Invoke your functions directly and view the logs",
        "\n  Run serverless in the project directory",
        "    Add metrics, alerts, and a log explorer, by enabling the dashboard functionality\n\n",
    ])


def test_commands_and_path_are_styled() -> None:
    fragments = list(compose_deploy_message("svc", True, True, URL))
    assert ("class:path", "./svc") in fragments
    assert ("class:command", URL) in fragments
    assert ("class:command", "serverless info") in fragments
    assert ("class:success", "Your project is live and available in ") in fragments


def test_composition_is_pure() -> None:
    for deployed in (True, False):
        for dashboard in (True, False):
            url = URL if deployed and dashboard else None
            first = compose_deploy_message("svc", deployed, dashboard, url)
            second = compose_deploy_message("svc", deployed, dashboard, url)
            assert list(first) == list(second)


def test_deployed_dashboard_message_without_url_keeps_layout() -> None:
    text = _text("svc", True, True)
    assert "\n  Open \n" in text
    assert text.startswith("\nYour project is live and available in ./svc")


def test_print_deploy_message_renders_with_style() -> None:
    with patch("onboarding.messages.print_formatted_text") as mock_print:
        print_deploy_message("svc", False, False)

    mock_print.assert_called_once()
    args, kwargs = mock_print.call_args
    assert fragment_list_to_text(args[0]).startswith("\nYour project is ready")
    assert kwargs["end"] == ""
    assert kwargs["style"] is not None
