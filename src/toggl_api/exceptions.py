"""Exception hierarchy for the Toggl Track API client."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class TogglError(Exception):
    """Base exception for all Toggl Track client errors."""


class ConfigurationError(TogglError):
    """Client configuration is missing or malformed (e.g. no API token)."""


class ErrorKind(enum.Enum):
    """Kinds of terminal API failures.

    The value is the machine-readable code carried by ``ApiError.code``.
    """

    RATE_LIMIT = "rate_limit_exceeded"
    NOT_FOUND = "not_found"
    VALIDATION = "validation_error"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    GENERIC = "api_error"


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.RATE_LIMIT: "Rate limit exceeded",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.VALIDATION: "Validation error",
    ErrorKind.AUTHENTICATION: "Authentication failed",
    ErrorKind.AUTHORIZATION: "Access forbidden",
    ErrorKind.GENERIC: "Unknown API error",
}

_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHORIZATION,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT,
}


@dataclass(frozen=True)
class FieldError:
    """A single field-level problem reported by the API."""

    field: str
    message: str


class ApiError(TogglError):
    """The API answered with a non-2xx status, or could not be reached.

    All attributes are read-only.

    Attributes:
        kind: Which failure this is; callers branch on it.
        status_code: HTTP status code (500 when no response was received).
        code: Machine-readable code, ``kind.value``.
        message: Human-readable message.
        retry_after: Seconds to wait before retrying (``RATE_LIMIT`` only).
        errors: Field-level problems (``VALIDATION`` only, usually empty).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        status_code: int | None = None,
        retry_after: int | None = None,
        errors: tuple[FieldError, ...] = (),
    ) -> None:
        message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(message)
        self._kind = kind
        self._message = message
        self._status_code = status_code if status_code is not None else _status_for(kind)
        self._retry_after = retry_after
        self._errors = tuple(errors)

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def code(self) -> str:
        return self._kind.value

    @property
    def message(self) -> str:
        return self._message

    @property
    def retry_after(self) -> int | None:
        return self._retry_after

    @property
    def errors(self) -> tuple[FieldError, ...]:
        return self._errors

    def __repr__(self) -> str:
        return (
            f"ApiError(kind={self._kind.name}, status_code={self._status_code}, "
            f"message={self._message!r})"
        )


class ResponseValidationError(TogglError):
    """A successful response body did not match its declared shape.

    Attributes:
        issues: Every violation, as ``<dotted.path>: <reason>``.
    """

    def __init__(self, issues: list[str] | tuple[str, ...]) -> None:
        self.issues = tuple(issues)
        super().__init__(f"Validation error: {', '.join(self.issues)}")


def extract_message(body: Any) -> str | None:
    """Return the ``error`` or ``message`` field of an error body, if any."""
    if not isinstance(body, dict):
        return None
    for key in ("error", "message"):
        value = body.get(key)
        if value:
            return str(value)
    return None


def error_from_response(
    status_code: int,
    body: Any,
    *,
    retry_after: int | None = None,
) -> ApiError:
    """Translate a failed response into an ``ApiError`` of the matching kind.

    Toggl returns plain error strings rather than field-level detail, so
    ``VALIDATION`` errors always carry an empty ``errors`` tuple.
    """
    kind = _STATUS_KINDS.get(status_code, ErrorKind.GENERIC)
    message = extract_message(body)
    if kind is ErrorKind.RATE_LIMIT:
        return ApiError(kind, message, retry_after=retry_after)
    return ApiError(kind, message, status_code=status_code)


def _status_for(kind: ErrorKind) -> int:
    for status, candidate in _STATUS_KINDS.items():
        if candidate is kind:
            return status
    return 500
