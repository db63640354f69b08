"""Shared UI styling for the setup wizard (prompts and status messages)."""

from questionary import Style

STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        # Status message classes
        ("success", "fg:ansigreen"),
        ("path", "fg:ansiwhite bold"),
        ("command", "bold"),
    ]
)
