"""Common GitLab models shared across domains."""

from __future__ import annotations

from .base import DateString, GitLabModel, Timestamp


class User(GitLabModel):
    id: int
    username: str
    name: str
    state: str
    avatar_url: str | None
    web_url: str

    @property
    def mention(self) -> str:
        return f"@{self.username}"


class Milestone(GitLabModel):
    id: int
    iid: int
    project_id: int | None = None
    title: str
    description: str | None
    state: str
    due_date: DateString | None
    start_date: DateString | None = None
    created_at: Timestamp
    updated_at: Timestamp
    web_url: str | None = None
