"""Response envelope normalization for the remote store.

The store wraps collections in one of three shapes. They are tried in this
order:

1. a bare list ``[...]``
2. an API envelope ``{"data": ...}`` whose payload is itself a list or a
   ``{"docs": [...]}`` page (unwrapped one level only)
3. a paginated page ``{"docs": [...]}``

Any other shape degrades to an empty list so a malformed but successful
response never breaks aggregation downstream.
"""

from __future__ import annotations

import logging
from typing import Any, Union

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Envelope = Union[list[Any], dict[str, Any]]


def _records(items: list[Any]) -> list[Record]:
    records = [item for item in items if isinstance(item, dict)]
    dropped = len(items) - len(records)
    if dropped:
        logger.warning("Dropped %d non-object entries from collection response", dropped)
    return records


def _unwrap_page(payload: Any) -> list[Record] | None:
    if isinstance(payload, list):
        return _records(payload)
    if isinstance(payload, dict) and isinstance(payload.get("docs"), list):
        return _records(payload["docs"])
    return None


def unwrap_collection(payload: Envelope | Any) -> list[Record]:
    """Flatten any supported envelope into a plain list of records."""
    if isinstance(payload, list):
        return _records(payload)

    if isinstance(payload, dict) and "data" in payload:
        records = _unwrap_page(payload["data"])
    else:
        records = _unwrap_page(payload)
    if records is not None:
        return records

    logger.warning("Unrecognized collection envelope (%s), treating as empty", type(payload).__name__)
    return []


def unwrap_record(payload: Any) -> Record | None:
    """Single-record responses: ``{"data": {...}}`` or a bare object."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    if isinstance(payload, dict) and "data" not in payload:
        return payload
    logger.warning("Unrecognized record envelope (%s)", type(payload).__name__)
    return None


def error_message(payload: Any, default: str) -> str:
    """Best-effort human message out of an error response body."""
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("detail")
        if isinstance(message, str) and message:
            return message
    return default
