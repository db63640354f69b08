"""Status messages printed when the deploy step finishes.

Four variants: {deployed, not deployed} x {dashboard configured, not}.
Messages are prompt_toolkit formatted text using the style classes defined in
onboarding.ui.STYLE.
"""

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from onboarding.ui import STYLE

Fragments = list[tuple[str, str]]


def _headline(text: str, service_name: str) -> Fragments:
    return [("", "\n"), ("class:success", text), ("class:path", f"./{service_name}")]


def _run(*parts: str) -> Fragments:
    """'Run <cmd> ...' line. parts alternate command, plain text, command, ..."""
    fragments: Fragments = [("", "\n  Run ")]
    for i, part in enumerate(parts):
        fragments.append(("class:command" if i % 2 == 0 else "", part))
    return fragments


def _note(text: str) -> Fragments:
    return [("", f"    {text}")]


def _join(lines: list[Fragments]) -> FormattedText:
    out: Fragments = []
    for i, line in enumerate(lines):
        if i:
            out.append(("", "\n"))
        out.extend(line)
    return FormattedText(out)


_LIVE = "Your project is live and available in "
_READY = "Your project is ready for deployment and available in "
_REDEPLOY = "Redeploy your service after you've updated your service code or configuration"
_ENABLE_DASHBOARD = (
    "Add metrics, alerts, and a log explorer, by enabling the dashboard functionality\n\n"
)


def compose_deploy_message(
    service_name: str,
    has_been_deployed: bool,
    is_configured_with_dashboard: bool,
    dashboard_url: str | None = None,
) -> FormattedText:
    """Build the post-deploy summary. Pure: same inputs, same output."""
    if is_configured_with_dashboard:
        if has_been_deployed:
            return _join([
                _headline(_LIVE, service_name),
                _run("serverless info", " in the project directory"),
                _note("View your endpoints and services"),
                [("", "\n  Open "), ("class:command", dashboard_url or "")],
                _note("Invoke your functions and view logs in the dashboard"),
                _run("serverless deploy", " in the project directory"),
                _note(_REDEPLOY + "\n\n"),
            ])

        return _join([
            _headline(_READY, service_name),
            _run("serverless deploy", " in the project directory"),
            _note("Deploy your newly created service"),
            _run("serverless info", " in the project directory after deployment"),
            _note("View your endpoints and services"),
            [("", "\n  Open Serverless Dashboard after deployment")],
            _note("Invoke your functions and view logs in the dashboard\n\n"),
        ])

    if has_been_deployed:
        return _join([
            _headline(_LIVE, service_name),
            _run("serverless info", " in the project directory"),
            _note("View your endpoints and services"),
            _run("serverless deploy", " in the directory"),
            _note(_REDEPLOY),
            _run(
                "serverless invoke", " and ", "serverless logs", " in the project directory"
            ),
            _note("Invoke your functions directly and view the logs"),
            _run("serverless", " in the project directory"),
            _note(_ENABLE_DASHBOARD),
        ])

    return _join([
        _headline(_READY, service_name),
        _run("serverless deploy", " in the project directory"),
        _note("Deploy your newly created service"),
        _run("serverless info", " in the project directory after deployment"),
        _note("View your endpoints and services"),
        _run(
            "serverless invoke",
            " and ",
            "serverless logs",
            " in the project directory after deployment",
        ),
        _note("Invoke your functions directly and view the logs"),
        _run("serverless", " in the project directory"),
        _note(_ENABLE_DASHBOARD),
    ])


def print_deploy_message(
    service_name: str,
    has_been_deployed: bool,
    is_configured_with_dashboard: bool,
    dashboard_url: str | None = None,
) -> None:
    """Render the summary to the terminal."""
    message = compose_deploy_message(
        service_name, has_been_deployed, is_configured_with_dashboard, dashboard_url
    )
    print_formatted_text(message, style=STYLE, end="")
