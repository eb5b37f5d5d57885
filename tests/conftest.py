"""Shared test fixtures for issue-prompt."""

from __future__ import annotations

from typing import Any

import pytest
import respx

from issue_prompt.client import GitLabClient
from issue_prompt.config import IssuePromptConfig

TEST_URL = "https://gitlab.example.com"
TEST_TOKEN = "test-token"


def user_payload(user_id: int = 1, username: str = "jdoe", name: str = "Jane Doe") -> dict:
    return {
        "id": user_id,
        "username": username,
        "name": name,
        "state": "active",
        "avatar_url": None,
        "web_url": f"{TEST_URL}/{username}",
    }


def note_payload(note_id: int, body: str = "Looks good", **overrides: Any) -> dict:
    payload = {
        "id": note_id,
        "body": body,
        "author": user_payload(2, "asmith", "Alex Smith"),
        "created_at": f"2024-01-16T09:{note_id % 60:02d}:00.000Z",
        "updated_at": f"2024-01-16T09:{note_id % 60:02d}:00.000Z",
        "system": False,
        "noteable_id": 1001,
        "noteable_type": "Issue",
        "noteable_iid": 42,
        "resolvable": False,
        "confidential": False,
        "internal": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def config() -> IssuePromptConfig:
    return IssuePromptConfig(url=TEST_URL, token=TEST_TOKEN, project_id="123")


@pytest.fixture
def client(config: IssuePromptConfig) -> GitLabClient:
    return GitLabClient(config)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=f"{TEST_URL}/api/v4", assert_all_called=False) as router:
        yield router


@pytest.fixture
def make_note():
    return note_payload


@pytest.fixture
def issue_payload() -> dict:
    """An issue carrying only the fields GitLab always sends."""
    return {
        "id": 1001,
        "iid": 42,
        "project_id": 123,
        "title": "Login fails with SSO",
        "description": None,
        "state": "opened",
        "created_at": "2024-01-15T10:30:00.000Z",
        "updated_at": "2024-01-16T08:00:00.000Z",
        "closed_at": None,
        "labels": [],
        "milestone": None,
        "assignees": [],
        "author": user_payload(),
        "user_notes_count": 0,
        "merge_requests_count": 0,
        "upvotes": 0,
        "downvotes": 0,
        "due_date": None,
        "confidential": False,
        "discussion_locked": None,
        "web_url": "https://gitlab.example.com/group/proj/-/issues/42",
    }


@pytest.fixture
def full_issue_payload(issue_payload: dict) -> dict:
    """An issue with every optional field populated."""
    closer = user_payload(3, "mlee", "Morgan Lee")
    return {
        **issue_payload,
        "description": "Steps to reproduce:\n\n1. Click *Sign in with SSO*",
        "state": "closed",
        "closed_at": "2024-01-20T17:45:10+02:00",
        "closed_by": closer,
        "labels": ["bug", "auth"],
        "milestone": {
            "id": 7,
            "iid": 3,
            "project_id": 123,
            "title": "v2.1",
            "description": None,
            "state": "active",
            "due_date": "2024-02-01",
            "start_date": "2024-01-01",
            "created_at": "2023-12-20T12:00:00.000Z",
            "updated_at": "2023-12-20T12:00:00.000Z",
            "web_url": "https://gitlab.example.com/group/proj/-/milestones/3",
        },
        "assignees": [user_payload(2, "asmith", "Alex Smith"), closer],
        "assignee": user_payload(2, "asmith", "Alex Smith"),
        "type": "ISSUE",
        "issue_type": "bug",
        "severity": "UNKNOWN",
        "user_notes_count": 2,
        "merge_requests_count": 1,
        "upvotes": 3,
        "downvotes": 1,
        "due_date": "2024-01-31",
        "confidential": True,
        "discussion_locked": False,
        "time_stats": {
            "time_estimate": 14400,
            "total_time_spent": 3600,
            "human_time_estimate": "4h",
            "human_total_time_spent": "1h",
        },
        "task_completion_status": {"count": 5, "completed_count": 2},
        "weight": 3,
        "has_tasks": True,
        "references": {"short": "#42", "relative": "#42", "full": "group/proj#42"},
        "_links": {
            "self": "https://gitlab.example.com/api/v4/projects/123/issues/42",
            "notes": "https://gitlab.example.com/api/v4/projects/123/issues/42/notes",
            "award_emoji": "https://gitlab.example.com/api/v4/projects/123/issues/42/award_emoji",
            "project": "https://gitlab.example.com/api/v4/projects/123",
            "closed_as_duplicate_of": None,
        },
    }
