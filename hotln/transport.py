"""Single-shot JSON POST over httpx."""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from hotln.errors import HttpError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class StatusFailure(Exception):
    """Non-2xx reply. Each client turns this into its own error kind."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"{status}: {body}")
        self.status = status
        self.body = body


def post_json(
    url: str,
    headers: Mapping[str, str],
    body: Any,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """POST ``body`` as JSON and return the parsed reply.

    Raises HttpError when the exchange itself fails, StatusFailure on a non-2xx
    status and ParseError when a 2xx body is not JSON. Never retries.
    """
    request_headers = {**headers, "Content-Type": "application/json"}
    content = json.dumps(body)
    try:
        if client is None:
            response = httpx.post(url, headers=request_headers, content=content, timeout=timeout)
        else:
            response = client.post(url, headers=request_headers, content=content, timeout=timeout)
    except httpx.TransportError as exc:
        raise HttpError(f"{type(exc).__name__}: {exc}") from exc

    if not response.is_success:
        raise StatusFailure(response.status_code, response.text)

    try:
        data = response.json()
    except ValueError as exc:
        raise ParseError(str(exc)) from exc

    logger.debug("Response from %s: %s", url, data, extra={"response": data})
    return data
