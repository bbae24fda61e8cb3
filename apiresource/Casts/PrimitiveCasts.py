from __future__ import annotations

from typing import Any, Dict, Optional

from apiresource.Exceptions import CastFailure

FALSY_STRINGS = frozenset({'', '0', 'false', 'off', 'no'})


class PrimitiveCast:
    """Base for scalar casts: the same coercion applies in both directions."""

    rule = 'mixed'

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None:
            return None
        return self._coerce(key, value)

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None:
            return None
        return self._coerce(key, value)

    def _coerce(self, key: Optional[str], value: Any) -> Any:
        raise NotImplementedError


class IntegerCast(PrimitiveCast):
    """Cast to int."""

    rule = 'int'

    def _coerce(self, key: Optional[str], value: Any) -> int:
        if isinstance(value, str):
            text = value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                return int(float(text))
            except (ValueError, OverflowError) as e:
                raise CastFailure(key, value, self.rule) from e
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise CastFailure(key, value, self.rule) from e


class FloatCast(PrimitiveCast):
    """Cast to float."""

    rule = 'float'

    def _coerce(self, key: Optional[str], value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise CastFailure(key, value, self.rule) from e


class StringCast(PrimitiveCast):
    """Cast to str."""

    rule = 'string'

    def _coerce(self, key: Optional[str], value: Any) -> str:
        if isinstance(value, (bytes, bytearray)):
            return value.decode('utf-8')
        return str(value)


class BooleanCast(PrimitiveCast):
    """Cast to bool. Strings such as "0", "false" and "off" are false."""

    rule = 'bool'

    def _coerce(self, key: Optional[str], value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() not in FALSY_STRINGS
        return bool(value)
