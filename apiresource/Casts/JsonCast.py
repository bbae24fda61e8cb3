from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Union

from apiresource.Exceptions import CastFailure
from apiresource.Support import Json


class JsonCast:
    """Cast for JSON serialization and deserialization."""

    rule = 'json'

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Transform stored JSON text to a Python structure."""
        if value is None:
            return None

        if isinstance(value, (str, bytes, bytearray)):
            return self._decode(key, value)

        return value

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[str]:
        """Transform a Python structure (or JSON text) to canonical JSON text."""
        if value is None:
            return None

        if isinstance(value, (str, bytes, bytearray)):
            value = self._decode(key, value)

        try:
            return Json.encode(value)
        except (TypeError, ValueError) as e:
            raise CastFailure(key, value, self.rule) from e

    def _decode(self, key: str, value: Union[str, bytes, bytearray], as_object: bool = False) -> Any:
        try:
            return Json.decode(value, as_object=as_object)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CastFailure(key, value, self.rule) from e


class ArrayCast(JsonCast):
    """Cast for list/dict structures stored as JSON text."""

    rule = 'array'

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Union[Dict[str, Any], List[Any], None]:
        return Json.to_plain(super().get(model, key, value, attributes))  # type: ignore[no-any-return]


class ObjectCast(JsonCast):
    """Cast for opaque objects stored as JSON text, read as SimpleNamespace."""

    rule = 'object'

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None:
            return None

        if isinstance(value, (str, bytes, bytearray)):
            return self._decode(key, value, as_object=True)

        if isinstance(value, SimpleNamespace):
            return value

        # Already decoded structure, rebuild it as namespaces
        return Json.decode(Json.encode(value), as_object=True)
