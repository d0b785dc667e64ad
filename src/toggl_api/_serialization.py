"""Request body and query string preparation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def drop_none(data: Any) -> Any:
    """Recursively remove dict entries whose value is ``None``.

    Toggl treats an explicit ``null`` as "clear this field", so unset
    optional values must be left out of bodies the client builds for
    creates. Update bodies from callers are sent untouched.
    """
    if isinstance(data, dict):
        return {k: drop_none(v) for k, v in data.items() if v is not None}
    if isinstance(data, list):
        return [drop_none(item) for item in data]
    return data


def encode_params(params: Iterable[tuple[str, Any]]) -> list[tuple[str, str]]:
    """Render query parameters as ordered string pairs.

    Booleans become ``true``/``false``; ``None`` values are skipped.
    """
    encoded: list[tuple[str, str]] = []
    for key, value in params:
        if value is None:
            continue
        if isinstance(value, bool):
            encoded.append((key, "true" if value else "false"))
        else:
            encoded.append((key, str(value)))
    return encoded
