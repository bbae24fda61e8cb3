from __future__ import annotations

from typing import Any, Dict, Iterator, KeysView, Mapping, Optional


class AttributeStore:
    """
    Raw attribute bag of a model instance.

    Holds the canonical stored form of every attribute. Guard, mutator and
    cast decisions are made by callers before writing here.
    """

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._attributes: Dict[str, Any] = dict(attributes) if attributes else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get the raw value of an attribute."""
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a raw value."""
        self._attributes[key] = value

    def has(self, key: str) -> bool:
        """Check if an attribute is present, even when it holds None."""
        return key in self._attributes

    def forget(self, key: str) -> None:
        """Remove an attribute."""
        self._attributes.pop(key, None)

    def all(self) -> Dict[str, Any]:
        """Get a shallow copy of every raw attribute."""
        return self._attributes.copy()

    def replace(self, attributes: Mapping[str, Any]) -> None:
        """Replace every raw attribute."""
        self._attributes = dict(attributes)

    def keys(self) -> KeysView[str]:
        return self._attributes.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeStore):
            return self._attributes == other._attributes
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeStore({self._attributes})"
