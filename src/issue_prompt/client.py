"""GitLab API client using httpx."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from .config import IssuePromptConfig
from .exceptions import (
    GitLabApiError,
    GitLabConnectionError,
    GitLabForbiddenError,
    GitLabNotFoundError,
    GitLabUnauthorizedError,
    SchemaValidationError,
)
from .models.issue_data import IssueData
from .models.issues import Issue
from .models.notes import Note
from .validation import validate, validate_many

logger = logging.getLogger(__name__)

NOTES_PER_PAGE = 100


class GitLabClient:
    """Async read-only client for the issue endpoints of the GitLab REST API v4.

    Requests are never retried: every failure surfaces as a
    :class:`~issue_prompt.exceptions.GitLabError` subclass.
    """

    def __init__(self, config: IssuePromptConfig | None = None) -> None:
        self.config = config or IssuePromptConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={
                "PRIVATE-TOKEN": self.config.token,
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitLabClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    async def _send(
        self, method: str, path: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Send a request and map non-success statuses to exceptions."""
        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = await self._client.request(method, path, params=params)
        except httpx.TransportError as e:
            raise GitLabConnectionError(
                f"Could not reach GitLab at {self.config.url}: {e}"
            ) from e

        if resp.status_code == 401:
            raise GitLabUnauthorizedError(resp.text)
        if resp.status_code == 403:
            raise GitLabForbiddenError(resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check URL and authentication"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise GitLabApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    @staticmethod
    def _total_pages(resp: httpx.Response) -> int:
        raw = resp.headers.get("x-total-pages")
        if raw is None:
            logger.warning("Response has no X-Total-Pages header; assuming a single page")
            return 1
        try:
            total = int(raw)
        except ValueError:
            total = -1
        if total < 0:
            raise GitLabApiError(resp.status_code, "Invalid X-Total-Pages header", raw)
        # An empty collection reports zero pages.
        return max(total, 1)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._decode(await self._send("GET", path, params))

    async def iter_pages(
        self, path: str, params: dict[str, Any] | None = None, *, per_page: int = 100
    ) -> AsyncIterator[tuple[int, Any]]:
        """Yield ``(page, payload)`` for every page of a list endpoint, in order.

        Pages are requested one at a time; the page count is only known once
        the first response arrives.
        """
        page = 1
        while True:
            page_params = {**(params or {}), "page": page, "per_page": per_page}
            resp = await self._send("GET", path, page_params)
            yield page, self._decode(resp)

            total_pages = self._total_pages(resp)
            logger.debug("Fetched page %d of %d from %s", page, total_pages, path)
            if page >= total_pages:
                return
            page += 1

    # ── Issues ────────────────────────────────────────────────────

    async def get_issue(self, project_id: str | int, issue_iid: int) -> Issue:
        enc = self._encode_id(project_id)
        payload = await self.get(f"/projects/{enc}/issues/{issue_iid}")
        return validate(Issue, payload, entity="issue")

    async def list_issue_notes(
        self, project_id: str | int, issue_iid: int, *, only_user_comments: bool = False
    ) -> list[Note]:
        """List an issue's notes, oldest first.

        With *only_user_comments* the server is asked to drop system notes and the
        result is filtered again locally, since the server-side filter is not
        guaranteed to catch every system note.
        """
        enc = self._encode_id(project_id)
        params: dict[str, Any] = {"sort": "asc", "order_by": "created_at"}
        if only_user_comments:
            params["activity_filter"] = "only_comments"

        notes: list[Note] = []
        async for page, payload in self.iter_pages(
            f"/projects/{enc}/issues/{issue_iid}/notes", params, per_page=NOTES_PER_PAGE
        ):
            notes.extend(validate_many(Note, payload, entity=f"note (page {page})"))

        mismatched = [
            (f"[{i}].noteable_iid", f"Expected {issue_iid}, got {note.noteable_iid}")
            for i, note in enumerate(notes)
            if note.noteable_iid is not None and note.noteable_iid != issue_iid
        ]
        if mismatched:
            raise SchemaValidationError("note", mismatched)

        if only_user_comments:
            notes = [note for note in notes if not note.system]
        return notes

    async def get_issue_data(
        self,
        project_id: str | int,
        issue_iid: int,
        *,
        include_comments: bool = True,
        only_user_comments: bool = False,
    ) -> IssueData:
        issue = await self.get_issue(project_id, issue_iid)
        notes: list[Note] = []
        if include_comments:
            notes = await self.list_issue_notes(
                project_id, issue_iid, only_user_comments=only_user_comments
            )
        return IssueData(issue=issue, notes=notes)
