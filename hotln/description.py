"""Render the markdown issue body."""

from collections.abc import Sequence


def format_description(description: str | None, system_info: Sequence[tuple[str, str]]) -> str:
    """Return the description followed by a ``## System Info`` table.

    Pipes inside keys or values are not escaped and will break the table.
    """
    body = ""

    if description is not None:
        body += f"{description}\n\n"

    if system_info:
        body += "## System Info\n\n"
        body += "| Field | Value |\n|-------|-------|\n"
        for key, value in system_info:
            body += f"| {key} | {value} |\n"

    return body.rstrip()
