"""Raw JSON output of the validated issue data."""

from __future__ import annotations

import json

from ..models.issue_data import IssueData


def render_issue_json(data: IssueData) -> str:
    """Dump *data* as two-space indented JSON.

    Fields missing from the source payload stay missing and explicit nulls stay
    ``null``, so validating the parsed output yields an equal ``IssueData``.
    """
    return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)
