"""Client for a relay that holds the Linear API key on our behalf."""

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from hotln.errors import ParseError, ProxyError
from hotln.models import CreatedIssue, IssueRequest
from hotln.transport import StatusFailure, post_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyClient:
    url: str
    token: str | None = None

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return f"ProxyClient(url={self.url!r}, token={token!r})"

    def with_token(self, token: str) -> "ProxyClient":
        """Return a copy that sends ``Authorization: Bearer <token>``."""
        return dataclasses.replace(self, token=token)

    def submit(self, request: IssueRequest, client: httpx.Client | None = None) -> CreatedIssue:
        payload = {
            "title": request.title,
            "description": request.rendered_description(),
        }
        headers = {}
        if self.token is not None:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            data = post_json(self.url, headers, payload, client=client)
        except StatusFailure as exc:
            raise ProxyError(exc.status, exc.body) from None

        url = data.get("url") if isinstance(data, dict) else None
        if not isinstance(url, str):
            raise ParseError("proxy response missing url")

        logger.info("Created Linear issue via proxy: %s", url, extra={"url": url})
        return CreatedIssue(url=url)

    def create_issue(
        self,
        title: str,
        description: str | None = None,
        system_info: Sequence[tuple[str, str]] = (),
    ) -> str:
        """Create a bug report issue via the relay and return its URL."""
        request = IssueRequest(title=title, description=description, system_info=tuple(system_info))
        return self.submit(request).url


def proxy(url: str) -> ProxyClient:
    """Client that posts bug reports to a relay URL."""
    return ProxyClient(url=url)
