"""File bug reports to Linear from your application.

Two modes: call the Linear API directly, or go through a relay that holds the
API key (recommended for open source / distributed binaries)::

    hotln.proxy("https://relay.example.com").with_token("secret-token").create_issue(
        "crash on startup", "details...", [("OS", "macos")]
    )

    hotln.direct("lin_api_...", "team-id", "project-id").create_issue(
        "crash on startup", "details...", [("OS", "macos")]
    )
"""

from hotln.description import format_description
from hotln.errors import ApiError, ConfigError, HotlnError, HttpError, ParseError, ProxyError
from hotln.models import CreatedIssue, IssueRequest
from hotln.providers.base import IssueReporter
from hotln.providers.direct import DirectClient, direct
from hotln.providers.proxy import ProxyClient, proxy

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ConfigError",
    "CreatedIssue",
    "DirectClient",
    "HotlnError",
    "HttpError",
    "IssueReporter",
    "IssueRequest",
    "ParseError",
    "ProxyClient",
    "ProxyError",
    "direct",
    "format_description",
    "proxy",
]
