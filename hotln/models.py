"""Shared pydantic models — the contract between the clients and their callers."""

from pydantic import BaseModel, ConfigDict

from hotln.description import format_description


class IssueRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    system_info: tuple[tuple[str, str], ...] = ()  # ordered, duplicate keys allowed

    def rendered_description(self) -> str:
        return format_description(self.description, self.system_info)


class CreatedIssue(BaseModel):
    """Returned by submit() — the url is what callers need, identifier is cosmetic."""

    model_config = ConfigDict(frozen=True)

    url: str
    identifier: str | None = None
