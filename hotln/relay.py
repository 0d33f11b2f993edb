"""Relay service that files issues on behalf of clients without a Linear key.

Clients speak the proxy contract (``{"title", "description"}`` in,
``{"url"}`` out); team and project always come from the relay's own settings.
"""

import json
import logging
import secrets
import threading
import time
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from hotln.errors import HotlnError
from hotln.models import IssueRequest
from hotln.providers.direct import ENDPOINT, DirectClient

logger = logging.getLogger(__name__)


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOTLINE_RELAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = None
    team_id: str | None = None
    project_id: str | None = None
    endpoint: str = ENDPOINT

    # When set, callers must send "Authorization: Bearer <token>".
    token: SecretStr | None = None

    rate_limit_max: int = 20
    rate_limit_window_seconds: float = 600.0


class RateLimiter:
    """Per-key request counter whose expiry is pushed back on every counted request."""

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._limit = limit
        self._window = window
        self._clock = clock
        self._lock = threading.Lock()
        self._counts: dict[str, tuple[int, float]] = {}  # key -> (count, expires_at)
        self._next_sweep = 0.0

    def __len__(self) -> int:
        return len(self._counts)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._counts.items() if expires_at <= now]
        for key in expired:
            del self._counts[key]
        self._next_sweep = now + self._window

    def hit(self, key: str) -> bool:
        """Count a request for ``key``; False once the limit is reached before expiry."""
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            count, expires_at = self._counts.get(key, (0, 0.0))
            if expires_at <= now:
                count = 0
            if count >= self._limit:
                return False
            self._counts[key] = (count + 1, now + self._window)
            return True


def _client_ip(request: Request) -> str | None:
    ip = request.headers.get("cf-connecting-ip")
    if ip:
        return ip
    return request.client.host if request.client else None


def _authorized(request: Request, token: SecretStr | None) -> bool:
    if token is None:
        return True
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer":
        return False
    return secrets.compare_digest(value.encode(), token.get_secret_value().encode())


def create_app(settings: RelaySettings | None = None, clock: Callable[[], float] = time.monotonic) -> FastAPI:
    settings = settings or RelaySettings()
    limiter = RateLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds, clock)

    app = FastAPI(title="hotln relay", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    @app.post("/")
    async def report(request: Request) -> Response:
        if not _authorized(request, settings.token):
            return PlainTextResponse("Unauthorized", status_code=401)

        ip = _client_ip(request)
        if ip is None:
            logger.warning("Client ip unavailable, skipping rate limit")
        elif not limiter.hit(ip):
            logger.info("Rate limit exceeded for %s", ip, extra={"ip": ip})
            return PlainTextResponse("Rate limit exceeded", status_code=429)

        try:
            body = json.loads(await request.body())
        except ValueError:
            return PlainTextResponse("Invalid JSON", status_code=400)

        title = body.get("title") if isinstance(body, dict) else None
        description = body.get("description") if isinstance(body, dict) else None
        if not isinstance(title, str) or not title or not isinstance(description, str) or not description:
            return PlainTextResponse("Missing title or description", status_code=400)

        if not (settings.api_key and settings.team_id and settings.project_id):
            return PlainTextResponse("Proxy not configured", status_code=500)

        client = DirectClient(
            api_key=settings.api_key.get_secret_value(),
            team_id=settings.team_id,
            project_id=settings.project_id,
            endpoint=settings.endpoint,
        )
        # The description arrives already rendered by the caller.
        issue_request = IssueRequest(title=title, description=description)
        try:
            created = await run_in_threadpool(client.submit, issue_request)
        except HotlnError as exc:
            logger.warning("Upstream issue creation failed: %s", exc, extra={"kind": type(exc).__name__})
            return PlainTextResponse(str(exc), status_code=502)

        return JSONResponse({"url": created.url})

    return app
