"""GitLab API exceptions."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for issue-prompt operations."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabUnauthorizedError(GitLabAuthError):
    """Raised on 401: the token is missing, invalid or expired."""

    def __init__(self, body: str = "") -> None:
        super().__init__(401, body)


class GitLabForbiddenError(GitLabAuthError):
    """Raised on 403: the token lacks the scope needed for the resource."""

    def __init__(self, body: str = "") -> None:
        super().__init__(403, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabConnectionError(GitLabError):
    """Raised when the request never produced an HTTP response."""


class SchemaValidationError(GitLabError):
    """Raised when a payload does not match the expected entity shape.

    ``errors`` holds one ``(field_path, message)`` pair per violation.
    """

    def __init__(self, entity: str, errors: list[tuple[str, str]]) -> None:
        self.entity = entity
        self.errors = errors
        details = "; ".join(f"{path}: {message}" for path, message in errors)
        super().__init__(f"Invalid {entity} payload ({len(errors)} error(s)): {details}")


class HandoffError(GitLabError):
    """Raised when the rendered prompt cannot be handed to the agent program."""
