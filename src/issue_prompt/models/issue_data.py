"""Aggregate of an issue and its discussion thread."""

from __future__ import annotations

from .base import GitLabModel
from .issues import Issue
from .notes import Note


class IssueData(GitLabModel):
    issue: Issue
    notes: list[Note] = []

    @property
    def user_notes(self) -> list[Note]:
        return [note for note in self.notes if not note.system]
