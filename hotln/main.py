"""hotln CLI — file a bug report to Linear."""

from typing import Annotated

import typer
from pydantic import SecretStr
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from hotln.errors import ApiError, ConfigError, HotlnError, HttpError, ParseError, ProxyError
from hotln.log import configure_logging
from hotln.settings import HotlnSettings, get_settings, select_client
from hotln.sysinfo import collect_system_info

app = typer.Typer(help="hotln: file bug reports to Linear, directly or through a relay", no_args_is_help=True)

ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-k", help="Profile name from ~/.config/hotln/config.toml"),
]

_ERROR_LABELS: dict[type[HotlnError], str] = {
    HttpError: "Network error",
    ApiError: "Linear API rejected the request",
    ProxyError: "Relay rejected the request",
    ParseError: "Unexpected response",
    ConfigError: "Configuration error",
}


def _fail(exc: HotlnError) -> typer.Exit:
    label = _ERROR_LABELS.get(type(exc), "Error")
    rprint(f"[red]{label}:[/red] {escape(str(exc))}")
    return typer.Exit(1)


def _apply_overrides(settings: HotlnSettings, **flags: str | None) -> HotlnSettings:
    """Return settings with every non-None CLI flag layered on top."""
    update: dict = {}
    for name, value in flags.items():
        if value is None:
            continue
        update[name] = SecretStr(value) if name in ("api_key", "proxy_token") else value
    return settings.model_copy(update=update)


@app.command("report")
def report(
    title: Annotated[str, typer.Argument(help="Short summary of the bug")],
    description: Annotated[str | None, typer.Option("--description", "-d", help="Detailed description")] = None,
    api_key: Annotated[str | None, typer.Option("--api-key", help="Linear API key (or HOTLINE_API_KEY)")] = None,
    proxy_url: Annotated[
        str | None,
        typer.Option("--proxy-url", help="Relay URL to use instead of calling Linear (or HOTLINE_PROXY_URL)"),
    ] = None,
    proxy_token: Annotated[
        str | None,
        typer.Option("--proxy-token", help="Bearer token for the relay (or HOTLINE_PROXY_TOKEN)"),
    ] = None,
    team_id: Annotated[
        str | None, typer.Option("--team-id", help="Linear team ID, direct mode (or HOTLINE_TEAM_ID)")
    ] = None,
    project_id: Annotated[
        str | None, typer.Option("--project-id", help="Linear project ID, direct mode (or HOTLINE_PROJECT_ID)")
    ] = None,
    profile: ProfileOpt = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log request details to stderr")] = False,
) -> None:
    """File a bug report and print the URL of the created issue."""
    settings = _apply_overrides(
        get_settings(profile=profile),
        api_key=api_key,
        proxy_url=proxy_url,
        proxy_token=proxy_token,
        team_id=team_id,
        project_id=project_id,
    )
    configure_logging("DEBUG" if verbose else settings.log_level, json_output=settings.log_json)

    try:
        client = select_client(settings)
        url = client.create_issue(title, description, collect_system_info())
    except HotlnError as exc:
        raise _fail(exc) from exc

    typer.echo(url)


@app.command("config-show")
def config_show(profile: ProfileOpt = None) -> None:
    """Show resolved configuration (masks credentials)."""
    settings = get_settings(profile=profile)

    def mask(val: str | None, prefix: str = "") -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"{prefix}...{val[-5:]}"

    def plain(val: str | None) -> str:
        return escape(val) if val else "[dim](not set)[/dim]"

    table = Table(title="hotln configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    mode = "proxy" if settings.proxy_url else "direct" if settings.api_key else "[dim](none)[/dim]"
    table.add_row("mode", mode)
    table.add_row("proxy_url", plain(settings.proxy_url))
    table.add_row("proxy_token", mask(settings.proxy_token.get_secret_value() if settings.proxy_token else None))
    table.add_row(
        "api_key",
        mask(settings.api_key.get_secret_value() if settings.api_key else None, prefix="lin_api_"),
    )
    table.add_row("team_id", plain(settings.team_id))
    table.add_row("project_id", plain(settings.project_id))
    table.add_row("endpoint", settings.endpoint)
    table.add_row("log_level", settings.log_level)

    rprint(table)


@app.command("relay")
def relay(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port to listen on")] = 8787,
) -> None:
    """Run the relay service (reads HOTLINE_RELAY_* settings)."""
    import uvicorn

    from hotln.relay import create_app

    configure_logging("INFO")
    uvicorn.run(create_app(), host=host, port=port)
