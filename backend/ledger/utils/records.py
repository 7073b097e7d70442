from __future__ import annotations

from typing import Any


def get_value(record, key: str, default: Any = None) -> Any:
    """Read a field from an ORM row, dataclass or plain dict."""
    if isinstance(record, dict):
        return record.get(key, default)
    return getattr(record, key, default)
