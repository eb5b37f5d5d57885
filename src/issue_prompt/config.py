"""issue-prompt configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class IssuePromptConfig:
    """Configuration for the issue-prompt CLI, loaded from environment variables."""

    url: str = ""
    token: str = ""
    project_id: str = ""
    timeout: int = 30
    ssl_verify: bool = True
    preamble: str | None = None

    @classmethod
    def from_env(cls) -> IssuePromptConfig:
        url = os.getenv("GITLAB_URL", "").rstrip("/")
        token = (
            os.getenv("GITLAB_TOKEN")
            or os.getenv("GITLAB_PAT")
            or os.getenv("GITLAB_PERSONAL_ACCESS_TOKEN")
            or os.getenv("GITLAB_API_TOKEN", "")
        )
        project_id = os.getenv("GITLAB_PROJECT_ID", "")
        raw_timeout = os.getenv("GITLAB_TIMEOUT", "30")
        try:
            timeout = int(raw_timeout)
        except ValueError:
            msg = f"GITLAB_TIMEOUT must be a whole number of seconds, got {raw_timeout!r}"
            raise ValueError(msg) from None
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )
        preamble = os.getenv("ISSUE_PROMPT_PREAMBLE") or None

        return cls(
            url=url,
            token=token,
            project_id=project_id,
            timeout=timeout,
            ssl_verify=ssl_verify,
            preamble=preamble,
        )

    @property
    def api_url(self) -> str:
        return f"{self.url}/api/v4"

    def validate(self) -> None:
        if not self.url:
            msg = "GITLAB_URL environment variable is required"
            raise ValueError(msg)
        if not self.token:
            msg = (
                "GitLab token is required. Set one of: GITLAB_TOKEN, GITLAB_PAT, "
                "GITLAB_PERSONAL_ACCESS_TOKEN, or GITLAB_API_TOKEN"
            )
            raise ValueError(msg)

    def validate_project(self) -> None:
        if not self.project_id:
            msg = "GITLAB_PROJECT_ID environment variable is required"
            raise ValueError(msg)
