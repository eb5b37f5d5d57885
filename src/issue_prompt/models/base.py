"""Base model and shared field types for GitLab API payloads."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel


def _check_timestamp(value: str) -> str:
    datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


def _check_date(value: str) -> str:
    date.fromisoformat(value)
    return value


# Kept as the source string so raw output reproduces it verbatim.
Timestamp = Annotated[str, AfterValidator(_check_timestamp)]
DateString = Annotated[str, AfterValidator(_check_date)]


class GitLabModel(BaseModel):
    """Base model with common behavior for all GitLab API models."""

    model_config = {"extra": "ignore", "populate_by_name": True, "frozen": True}

    def is_present(self, field: str) -> bool:
        """Whether *field* was supplied by the payload, even as an explicit null."""
        return field in self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
