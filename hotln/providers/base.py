"""Capability shared by the direct and proxy clients."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class IssueReporter(Protocol):
    def create_issue(
        self,
        title: str,
        description: str | None = None,
        system_info: Sequence[tuple[str, str]] = (),
    ) -> str: ...
