from __future__ import annotations

import json
from datetime import date, datetime
from types import SimpleNamespace
from typing import Any, Optional

# Compact separators, matching the stored form produced by JSON APIs
SEPARATORS = (',', ':')


def json_default(value: Any) -> Any:
    """Encode values the json module does not know about."""
    if hasattr(value, 'to_dict') and callable(value.to_dict):
        return value.to_dict()
    if isinstance(value, SimpleNamespace):
        return vars(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if hasattr(value, '__dict__'):
        return vars(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(value: Any, **kwargs: Any) -> str:
    """Encode a value as compact JSON text."""
    kwargs.setdefault('separators', SEPARATORS)
    kwargs.setdefault('default', json_default)
    return json.dumps(value, **kwargs)


def decode(text: Any, as_object: bool = False) -> Any:
    """
    Decode JSON text.

    @param as_object: decode JSON objects to SimpleNamespace instead of dict
    @raise json.JSONDecodeError: on malformed text
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode('utf-8')
    hook: Optional[Any] = (lambda d: SimpleNamespace(**d)) if as_object else None
    return json.loads(text, object_hook=hook)


def to_plain(value: Any) -> Any:
    """Convert a SimpleNamespace tree to dicts and lists."""
    if isinstance(value, SimpleNamespace):
        return {k: to_plain(v) for k, v in vars(value).items()}
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
