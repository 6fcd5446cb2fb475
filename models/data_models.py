"""Data models for GitHub pull request records and fetch state."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRef(BaseModel):
    """A GitHub user as embedded in PR payloads (author, assignee, reviewer)."""
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""


class Label(BaseModel):
    """PR label (name + hex color without the leading #)."""
    model_config = ConfigDict(frozen=True)

    name: str
    color: str = ""


class PullRequestRecord(BaseModel):
    """Open PR as returned by the GitHub list endpoint.

    Only the fields the viewer displays are kept; everything else in the
    API payload is ignored. Records are never mutated after fetching, only
    filtered in or out of the displayed view.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    number: int
    title: str
    user: UserRef
    html_url: str
    created_at: datetime
    updated_at: datetime
    state: Literal["open", "closed"] = "open"
    labels: list[Label] = Field(default_factory=list)
    assignees: list[UserRef] = Field(default_factory=list)
    requested_reviewers: list[UserRef] = Field(default_factory=list)

    @field_validator("labels", "assignees", "requested_reviewers", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        """GitHub sends null instead of [] for some PRs."""
        return [] if v is None else v

    @property
    def author_login(self) -> str:
        return self.user.login


class FetchState(BaseModel):
    """Snapshot of the store: fetch progress plus accumulated/filtered views.

    Transitions:
    - idle -> loading (load started, accumulated reset)
    - loading -> idle (all pages fetched; partial pages are visible while loading)
    - loading -> error (transport, status or parse failure)
    """
    status: Literal["idle", "loading", "error"] = "idle"
    error: Optional[str] = None
    accumulated: list[PullRequestRecord] = Field(default_factory=list)
    filtered: list[PullRequestRecord] = Field(default_factory=list)
    pages_fetched: int = 0
    generation: int = 0
    last_updated: Optional[datetime] = None
