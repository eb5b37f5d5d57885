"""Shared helper functions for formatter modules."""

from __future__ import annotations

import functools
import re
from datetime import datetime, timezone
from pathlib import Path
from string import Template

_PROMPTS_DIR = str(Path(__file__).resolve().parent.parent / "resources" / "prompts")


@functools.cache
def _load_file(base_dir: str, filename: str) -> str:
    """Load a file from the given directory with path traversal protection.

    Results are cached; static files do not change at runtime.
    """
    if "/" in filename or "\\" in filename or ".." in filename:
        msg = f"Invalid filename: {filename}"
        raise ValueError(msg)
    base = Path(base_dir)
    path = base / filename
    if not path.resolve().is_relative_to(base.resolve()):
        msg = f"Invalid filename: {filename}"
        raise ValueError(msg)
    return path.read_text(encoding="utf-8")


def _render(filename: str, **kwargs: str) -> str:
    """Load a prompt template and substitute variables safely.

    Uses string.Template ($var) instead of str.format({var}) to avoid
    KeyError when parameter values contain curly braces.
    """
    return Template(_load_file(_PROMPTS_DIR, filename)).safe_substitute(kwargs)


def _format_datetime(value: str) -> str:
    """Normalize an ISO-8601 timestamp to ``YYYY-MM-DD HH:MM:SS`` in UTC.

    Timestamps without an offset are taken to be UTC already.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


# ════════════════════════════════════════════════════════════════════
# GitLab URL parsing
# ════════════════════════════════════════════════════════════════════

# Matches the trailing  /-/issues/<iid>  of an issue URL
_ISSUE_SUFFIX_RE = re.compile(r"/-/issues/\d+$")


def _project_url_from_issue_url(value: str) -> str:
    """Strip the ``/-/issues/<iid>`` suffix from an issue URL.

    URLs without that suffix are returned unchanged.
    """
    return _ISSUE_SUFFIX_RE.sub("", value)
