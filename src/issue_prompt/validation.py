"""Payload validation at the API boundary.

Every decoded JSON document is narrowed into a model here before any other
code sees it. Pydantic does the checking; this module turns its errors into a
:class:`SchemaValidationError` listing every offending field path.
"""

from __future__ import annotations

import functools
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .exceptions import SchemaValidationError

M = TypeVar("M", bound=BaseModel)


def _format_loc(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``author.username`` or ``[3].author.id``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "<root>"


def _flatten(error: ValidationError) -> list[tuple[str, str]]:
    return [
        (_format_loc(tuple(item["loc"])), item["msg"])
        for item in error.errors(include_url=False)
    ]


@functools.cache
def _list_adapter(model: type[M]) -> TypeAdapter[list[M]]:
    return TypeAdapter(list[model])  # type: ignore[valid-type]


def validate(model: type[M], payload: Any, *, entity: str) -> M:
    """Validate a single JSON object against *model*."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise SchemaValidationError(entity, _flatten(e)) from e


def validate_many(model: type[M], payload: Any, *, entity: str) -> list[M]:
    """Validate a JSON array whose items must all match *model*."""
    try:
        return _list_adapter(model).validate_python(payload)
    except ValidationError as e:
        raise SchemaValidationError(entity, _flatten(e)) from e
