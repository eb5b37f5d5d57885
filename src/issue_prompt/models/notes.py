"""Note (comment) models."""

from __future__ import annotations

from .base import GitLabModel, Timestamp
from .common import User


class Note(GitLabModel):
    id: int
    body: str
    author: User
    created_at: Timestamp
    updated_at: Timestamp
    system: bool
    noteable_id: int
    noteable_type: str
    project_id: int | None = None
    noteable_iid: int | None = None
    resolvable: bool
    confidential: bool | None = None
    internal: bool | None = None
    imported: bool | None = None
    imported_from: str | None = None

    @property
    def is_internal(self) -> bool:
        return bool(self.confidential or self.internal)
