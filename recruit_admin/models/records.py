"""Leniency helpers for raw store records.

The store is schemaless, so a record may carry a number where text is
expected, an epoch timestamp where an ISO string is expected, or a nested
object in a scalar slot. These helpers coerce what can be coerced and drop
the rest so the model falls back to its default instead of rejecting the
whole record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def epoch_to_iso(value: int | float) -> str | None:
    """Epoch milliseconds (the JS ``Date`` convention) to an ISO-8601 string."""
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def as_text(value: Any) -> str | None:
    """Text for a scalar slot, or None when the value cannot stand for text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    return None


def coerce_fields(
    data: dict[str, Any],
    text_fields: Iterable[str],
    timestamp_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """Coerce text and timestamp slots in place; unusable values are removed."""
    timestamp_fields = set(timestamp_fields)
    for key in [*text_fields, *timestamp_fields]:
        value = data.get(key)
        if value is None or isinstance(value, str):
            continue
        if key in timestamp_fields and isinstance(value, (int, float)) and not isinstance(value, bool):
            coerced = epoch_to_iso(value)
        else:
            coerced = as_text(value)
        if coerced is None:
            logger.debug("Dropping unusable %s value %r", key, value)
            data.pop(key)
        else:
            data[key] = coerced
    return data


def as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def text_list(value: Any) -> list[str]:
    """A list of strings; non-list values become empty, unusable entries are skipped."""
    if not isinstance(value, list):
        return []
    return [text for text in (as_text(item) for item in value) if text is not None]
