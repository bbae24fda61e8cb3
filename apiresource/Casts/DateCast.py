from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from apiresource.Casts import Temporal
from apiresource.Exceptions import CastFailure


class DateTimeCast:
    """Cast to an aware datetime, stored as text in the model's date format."""

    rule = 'datetime'

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[datetime]:
        if value is None:
            return None
        try:
            return self._read(value, self._format(model))
        except ValueError as e:
            raise CastFailure(key, value, self.rule) from e

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None:
            return None
        try:
            return self._write(value, self._format(model))
        except ValueError as e:
            raise CastFailure(key, value, self.rule) from e

    def _read(self, value: Any, date_format: str) -> Any:
        return Temporal.as_datetime(value, date_format)

    def _write(self, value: Any, date_format: str) -> Any:
        return Temporal.from_datetime(value, date_format)

    @staticmethod
    def _format(model: Any) -> str:
        if model is not None and hasattr(model, 'get_date_format'):
            return str(model.get_date_format())
        return Temporal.DEFAULT_DATE_FORMAT


class DateCast(DateTimeCast):
    """Cast to a datetime at midnight of its day."""

    rule = 'date'

    def _read(self, value: Any, date_format: str) -> Any:
        return Temporal.as_date(value, date_format)


class TimestampCast(DateTimeCast):
    """Cast to integer Unix epoch seconds."""

    rule = 'timestamp'

    def _read(self, value: Any, date_format: str) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return Temporal.as_timestamp(value, date_format)

    def _write(self, value: Any, date_format: str) -> Any:
        return self._read(value, date_format)
