"""Markdown "issue prompt" document for drafting agents.

The layout is fixed: title, metadata, description, comments, issue URL and
the workflow instructions. Optional fields only add lines, so every valid
:class:`IssueData` renders.
"""

from __future__ import annotations

from ..models.common import User
from ..models.issue_data import IssueData
from ..models.issues import Issue
from ..models.notes import Note
from ._helpers import _format_datetime, _project_url_from_issue_url, _render

FIX_ISSUE_TYPES = frozenset({"bug", "incident"})


# ════════════════════════════════════════════════════════════════════
# Workflow derivations
# ════════════════════════════════════════════════════════════════════


def branch_prefix(issue: Issue) -> str:
    return "fix" if issue.kind in FIX_ISSUE_TYPES else "feat"


def branch_name(issue: Issue) -> str:
    return f"{branch_prefix(issue)}/{issue.iid}"


def commit_template(issue: Issue) -> str:
    return f"{branch_prefix(issue)}: <description> #{issue.iid}"


def merge_request_url(issue: Issue) -> str:
    """URL of the "new merge request" form with the issue branch preselected."""
    project_url = _project_url_from_issue_url(issue.web_url)
    return (
        f"{project_url}/-/merge_requests/new"
        f"?merge_request%5Bsource_branch%5D={branch_name(issue)}"
    )


# ════════════════════════════════════════════════════════════════════
# Sections
# ════════════════════════════════════════════════════════════════════


def _format_user(user: User) -> str:
    return f"{user.mention} ({user.name})"


def _format_assignees(assignees: list[User]) -> str:
    if not assignees:
        return "None"
    return ", ".join(a.mention for a in assignees)


def _format_labels(labels: list[str]) -> str:
    if not labels:
        return "None"
    return ", ".join(f"`{label}`" for label in labels)


def _format_metadata(issue: Issue) -> str:
    lines = [
        f"- **Title:** {issue.title}",
        f"- **State:** {issue.state}",
        f"- **Type:** {issue.kind}",
        f"- **Author:** {_format_user(issue.author)}",
        f"- **Assignees:** {_format_assignees(issue.assignees)}",
        f"- **Labels:** {_format_labels(issue.labels)}",
    ]

    if issue.milestone:
        lines.append(f"- **Milestone:** {issue.milestone.title}")
    if issue.due_date:
        lines.append(f"- **Due Date:** {issue.due_date}")

    lines.append(f"- **Created:** {_format_datetime(issue.created_at)}")
    lines.append(f"- **Updated:** {_format_datetime(issue.updated_at)}")

    if issue.closed_at:
        lines.append(f"- **Closed:** {_format_datetime(issue.closed_at)}")
        if issue.closed_by:
            lines.append(f"- **Closed By:** {_format_user(issue.closed_by)}")
        elif issue.is_present("closed_by"):
            lines.append("- **Closed By:** Unknown")

    if issue.confidential:
        lines.append("- **Confidential:** Yes")
    if issue.weight is not None:
        lines.append(f"- **Weight:** {issue.weight}")

    if issue.time_stats:
        if issue.time_stats.human_time_estimate:
            lines.append(f"- **Time Estimate:** {issue.time_stats.human_time_estimate}")
        if issue.time_stats.human_total_time_spent:
            lines.append(f"- **Time Spent:** {issue.time_stats.human_total_time_spent}")

    tasks = issue.task_completion_status
    if tasks and tasks.count > 0:
        lines.append(f"- **Tasks:** {tasks.completed_count}/{tasks.count} completed")

    return "## Metadata\n\n" + "\n".join(lines)


def _format_description(issue: Issue) -> str:
    content = issue.description or "_No description provided._"
    return f"## Description\n\n{content}"


def _format_note(note: Note, position: int) -> str:
    tags = ""
    if note.system:
        tags += " [System]"
    if note.is_internal:
        tags += " [Internal]"
    header = (
        f"### Comment {position}{tags} - {note.author.mention}"
        f" ({_format_datetime(note.created_at)})"
    )
    return f"{header}\n\n{note.body}"


def _format_comments(data: IssueData) -> str:
    if not data.notes:
        return "## Comments\n\n_No comments._"

    header = f"## Comments ({len(data.notes)} total, {len(data.user_notes)} user comments)"
    entries = "\n\n".join(_format_note(note, i) for i, note in enumerate(data.notes, start=1))
    return f"{header}\n\n{entries}"


def _format_workflow(issue: Issue) -> str:
    return _render(
        "workflow.md",
        branch_name=branch_name(issue),
        commit_template=commit_template(issue),
        merge_request_url=merge_request_url(issue),
    ).rstrip()


def render_issue_prompt(data: IssueData, *, preamble: str | None = None) -> str:
    """Render *data* as the markdown issue prompt."""
    issue = data.issue
    sections = [
        f"# GitLab Issue #{issue.iid}",
        _format_metadata(issue),
        _format_description(issue),
        _format_comments(data),
        f"---\n**Issue URL:** {issue.web_url}",
        _format_workflow(issue),
    ]
    if preamble:
        sections.insert(0, preamble)
    return "\n\n".join(sections)
