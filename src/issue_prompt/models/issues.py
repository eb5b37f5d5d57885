"""Issue models."""

from __future__ import annotations

from pydantic import Field

from .base import DateString, GitLabModel, Timestamp
from .common import Milestone, User


class TimeStats(GitLabModel):
    time_estimate: int
    total_time_spent: int
    human_time_estimate: str | None
    human_total_time_spent: str | None


class TaskCompletionStatus(GitLabModel):
    count: int
    completed_count: int


class IssueReferences(GitLabModel):
    short: str
    relative: str
    full: str


class IssueLinks(GitLabModel):
    self_url: str = Field(alias="self")
    notes: str
    award_emoji: str
    project: str
    closed_as_duplicate_of: str | None = None


class Issue(GitLabModel):
    id: int
    iid: int
    project_id: int
    title: str
    description: str | None
    state: str
    created_at: Timestamp
    updated_at: Timestamp
    closed_at: Timestamp | None
    closed_by: User | None = None
    labels: list[str]
    milestone: Milestone | None
    assignees: list[User]
    assignee: User | None = None
    author: User
    type: str | None = None
    user_notes_count: int
    merge_requests_count: int
    upvotes: int
    downvotes: int
    due_date: DateString | None
    confidential: bool
    discussion_locked: bool | None
    issue_type: str | None = None
    severity: str | None = None
    web_url: str
    time_stats: TimeStats | None = None
    task_completion_status: TaskCompletionStatus | None = None
    weight: int | None = None
    has_tasks: bool | None = None
    references: IssueReferences | None = None
    links: IssueLinks | None = Field(default=None, alias="_links")

    @property
    def kind(self) -> str:
        """Issue type tag, falling back to ``"issue"`` when the payload has none."""
        return self.issue_type or self.type or "issue"
