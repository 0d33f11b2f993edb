"""Settings resolution with named profile support."""

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

import tomlkit
import typer
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from hotln.errors import ConfigError
from hotln.providers.base import IssueReporter
from hotln.providers.direct import ENDPOINT, DirectClient
from hotln.providers.proxy import ProxyClient

CONFIG_PATH = Path.home() / ".config" / "hotln" / "config.toml"


class HotlnSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOTLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Direct mode
    api_key: SecretStr | None = None
    team_id: str | None = None
    project_id: str | None = None
    endpoint: str = ENDPOINT

    # Proxy mode, takes precedence over direct mode when set
    proxy_url: str | None = None
    proxy_token: SecretStr | None = None

    log_level: str = "WARNING"
    log_json: bool = False


@lru_cache(maxsize=1)
def _load_toml() -> tomlkit.TOMLDocument:
    """Load ~/.config/hotln/config.toml, returning empty document if missing."""
    if not CONFIG_PATH.exists():
        return tomlkit.document()
    with CONFIG_PATH.open() as fh:
        return tomlkit.load(fh)


def _list_profiles(config: Mapping) -> list[str]:
    # tomlkit Table implements MutableMapping but not dict, so check Mapping
    return [k for k, v in config.items() if isinstance(v, Mapping)]


def get_settings(profile: str | None = None) -> HotlnSettings:
    """Resolve the active profile and return a fully populated HotlnSettings.

    Profile precedence (highest to lowest):
    1. profile argument (--profile CLI flag)
    2. HOTLINE_PROFILE env var
    3. default_profile key in ~/.config/hotln/config.toml
    4. First profile defined in ~/.config/hotln/config.toml

    Values from the profile are defaults; env vars and .env override them.
    """
    toml_config = _load_toml()

    active = (
        profile
        or os.environ.get("HOTLINE_PROFILE")
        or toml_config.get("default_profile")
        or ((_profiles := _list_profiles(toml_config)) and _profiles[0] or None)
    )

    profile_defaults: dict = {}
    if active:
        if active in toml_config and isinstance(toml_config[active], Mapping):
            profile_defaults = dict(toml_config[active])
        else:
            profiles = _list_profiles(toml_config)
            typer.echo(f"Profile '{active}' not found in {CONFIG_PATH}. Available: {profiles or '(none)'}")
            raise typer.Exit(1)

    # init kwargs outrank env and .env, so only pass profile values the env left unset
    from_env = HotlnSettings()
    profile_defaults = {k: v for k, v in profile_defaults.items() if k not in from_env.model_fields_set}
    return HotlnSettings(**profile_defaults)


def select_client(settings: HotlnSettings) -> IssueReporter:
    """Pick proxy mode when a proxy URL is set, direct mode when an API key is."""
    if settings.proxy_url:
        client = ProxyClient(url=settings.proxy_url)
        if settings.proxy_token:
            client = client.with_token(settings.proxy_token.get_secret_value())
        return client

    if settings.api_key:
        if not settings.team_id:
            raise ConfigError("--team-id is required for direct mode (or set HOTLINE_TEAM_ID)")
        if not settings.project_id:
            raise ConfigError("--project-id is required for direct mode (or set HOTLINE_PROJECT_ID)")
        return DirectClient(
            api_key=settings.api_key.get_secret_value(),
            team_id=settings.team_id,
            project_id=settings.project_id,
            endpoint=settings.endpoint,
        )

    raise ConfigError("Provide either --proxy-url / HOTLINE_PROXY_URL or --api-key / HOTLINE_API_KEY")
