from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class CastInterface(Protocol):
    """Interface for Laravel-style attribute casting."""

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Convert a stored value to its runtime value."""
        ...

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Convert a runtime value to its stored value."""
        ...
