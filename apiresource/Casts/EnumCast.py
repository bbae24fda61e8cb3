from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Type

from apiresource.Exceptions import CastFailure


class EnumCast:
    """
    Cast for enum values.

    Stores the enum's value and reads it back as the enum member.
    """

    rule = 'enum'

    def __init__(self, enum_class: Type[Enum]) -> None:
        self.enum_class = enum_class

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[Enum]:
        """Convert a stored value to an enum member."""
        if value is None:
            return None
        return self._member(key, value)

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Convert an enum member (or a valid value) to its stored value."""
        if value is None:
            return None
        return self._member(key, value).value

    def _member(self, key: str, value: Any) -> Enum:
        if isinstance(value, self.enum_class):
            return value
        try:
            return self.enum_class(value)
        except ValueError:
            pass
        if isinstance(value, str) and value in self.enum_class.__members__:
            return self.enum_class[value]
        raise CastFailure(key, value, f"{self.rule}:{self.enum_class.__name__}")


def enum_cast(enum_class: Type[Enum]) -> EnumCast:
    """Helper function to create enum cast."""
    return EnumCast(enum_class)
