"""Structural validation of decoded response bodies."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .exceptions import ResponseValidationError

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def validate(shape: type[T] | Any, value: Any) -> T:
    """Check ``value`` against ``shape`` and return the typed result.

    ``shape`` is a model from ``toggl_api.models`` or a container of one,
    such as ``list[TimeEntry]``. Unknown fields are ignored; missing fields
    and wrong primitive types are not.

    Raises:
        ResponseValidationError: Listing every violation, not just the first.
    """
    try:
        return _adapter(shape).validate_python(value)
    except ValidationError as err:
        raise ResponseValidationError(
            [_describe(issue) for issue in err.errors()]
        ) from err


def _describe(issue: Any) -> str:
    path = ".".join(str(part) for part in issue["loc"]) or "<root>"
    return f"{path}: {issue['msg']}"
