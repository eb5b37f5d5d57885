"""Hand a rendered prompt to an interactive coding agent."""

from __future__ import annotations

import logging
import shutil
import subprocess

from .exceptions import HandoffError

logger = logging.getLogger(__name__)

OPENCODE = "opencode"


def open_in_opencode(prompt: str) -> int:
    """Start opencode with *prompt* preloaded and return its exit code."""
    executable = shutil.which(OPENCODE)
    if executable is None:
        msg = f"'{OPENCODE}' was not found on PATH"
        raise HandoffError(msg)

    logger.debug("Launching %s with a %d character prompt", executable, len(prompt))
    try:
        result = subprocess.run([executable, "--prompt", prompt], check=False)
    except OSError as e:
        msg = f"Could not start {executable}: {e}"
        raise HandoffError(msg) from e
    return result.returncode
