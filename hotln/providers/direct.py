"""Linear GraphQL API client, authenticated with a caller-held API key."""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from hotln.errors import ApiError, ParseError
from hotln.models import CreatedIssue, IssueRequest
from hotln.transport import StatusFailure, post_json

logger = logging.getLogger(__name__)

ENDPOINT = "https://api.linear.app/graphql"

_CREATE_ISSUE = """
mutation IssueCreate($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      url
    }
  }
}
"""


def _dig(node: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


@dataclass(frozen=True)
class DirectClient:
    api_key: str
    team_id: str
    project_id: str
    endpoint: str = ENDPOINT

    def __repr__(self) -> str:
        # keep the key out of tracebacks and logs
        return f"DirectClient(team_id={self.team_id!r}, project_id={self.project_id!r}, endpoint={self.endpoint!r})"

    def _gql(self, query: str, variables: dict, client: httpx.Client | None) -> dict:
        try:
            data = post_json(
                self.endpoint,
                {"Authorization": self.api_key},
                {"query": query, "variables": variables},
                client=client,
            )
        except StatusFailure as exc:
            raise ApiError(f"Linear API returned {exc.status}: {exc.body}") from None
        if isinstance(data, dict) and "errors" in data:
            raise ApiError(f"Linear API error: {json.dumps(data['errors'])}")
        return data

    def submit(self, request: IssueRequest, client: httpx.Client | None = None) -> CreatedIssue:
        variables = {
            "input": {
                "teamId": self.team_id,
                "projectId": self.project_id,
                "title": request.title,
                "description": request.rendered_description(),
            }
        }
        data = self._gql(_CREATE_ISSUE, variables, client)

        issue = _dig(data, "data", "issueCreate", "issue")
        url = _dig(issue, "url")
        if not isinstance(url, str):
            raise ParseError("Linear response missing issue url")
        identifier = _dig(issue, "identifier")
        if not isinstance(identifier, str):
            identifier = "unknown"

        logger.info("Created Linear issue %s: %s", identifier, url, extra={"identifier": identifier, "url": url})
        return CreatedIssue(url=url, identifier=identifier)

    def create_issue(
        self,
        title: str,
        description: str | None = None,
        system_info: Sequence[tuple[str, str]] = (),
    ) -> str:
        """Create a bug report issue on Linear and return its URL."""
        request = IssueRequest(title=title, description=description, system_info=tuple(system_info))
        return self.submit(request).url


def direct(api_key: str, team_id: str, project_id: str) -> DirectClient:
    """Client that calls Linear's GraphQL API directly."""
    return DirectClient(api_key=api_key, team_id=team_id, project_id=project_id)
