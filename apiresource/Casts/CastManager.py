from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Dict, Optional, Type

from apiresource.Casts.CastInterface import CastInterface
from apiresource.Casts.DateCast import DateCast, DateTimeCast, TimestampCast
from apiresource.Casts.EnumCast import EnumCast
from apiresource.Casts.JsonCast import ArrayCast, JsonCast, ObjectCast
from apiresource.Casts.ModelCast import ModelCast, ModelCollectionCast
from apiresource.Casts.PrimitiveCasts import BooleanCast, FloatCast, IntegerCast, StringCast
from apiresource.Exceptions import InvalidCast
from apiresource.Support.Registry import registry

logger = logging.getLogger(__name__)

BUILTIN_CASTS: Dict[str, Type[Any]] = {
    'int': IntegerCast,
    'integer': IntegerCast,
    'float': FloatCast,
    'real': FloatCast,
    'double': FloatCast,
    'string': StringCast,
    'str': StringCast,
    'bool': BooleanCast,
    'boolean': BooleanCast,
    'object': ObjectCast,
    'array': ArrayCast,
    'list': ArrayCast,
    'dict': ArrayCast,
    'json': JsonCast,
    'date': DateCast,
    'datetime': DateTimeCast,
    'custom_datetime': DateTimeCast,
    'timestamp': TimestampCast,
}

DATE_CASTS = (DateTimeCast,)


class CastManager:
    """
    Resolves and applies the cast rules declared on a model class.

    Rules are resolved to cast objects once per class and kept in the shared
    registry; cast objects hold no per-instance state.
    """

    BUCKET = 'casts'

    def __init__(self, model_class: Type[Any]) -> None:
        self.model_class = model_class

    @property
    def casts(self) -> Dict[str, Any]:
        return registry.remember(self.BUCKET, self.model_class, self._resolve_all)

    def has_cast(self, key: str) -> bool:
        """Determine whether an attribute has a cast rule."""
        return key in self.casts

    def get_cast(self, key: str) -> Optional[Any]:
        return self.casts.get(key)

    def is_date_cast(self, key: str) -> bool:
        """Determine whether an attribute is cast to a date/time value."""
        return isinstance(self.casts.get(key), DATE_CASTS)

    def caches_objects(self, key: str) -> bool:
        """Determine whether reads of an attribute hydrate a cached object."""
        return bool(getattr(self.casts.get(key), 'caches_objects', False))

    def keeps_object(self, key: str, value: Any) -> bool:
        """Determine whether an assigned value already is the hydrated object of an attribute."""
        if value is None or not self.caches_objects(key):
            return False
        is_hydrated = getattr(self.casts[key], 'is_hydrated', None)
        return bool(is_hydrated(value)) if is_hydrated is not None else False

    def cast_on_read(self, model: Any, key: str, value: Any) -> Any:
        """Cast a stored value to its runtime value."""
        cast = self.casts[key]
        return cast.get(model, key, value, model.get_raw_attributes())

    def cast_on_write(self, model: Any, key: str, value: Any) -> Any:
        """Cast a runtime value to its stored value."""
        cast = self.casts[key]
        return cast.set(model, key, value, model.get_raw_attributes())

    def _resolve_all(self) -> Dict[str, Any]:
        declared = getattr(self.model_class, 'casts', None) or {}
        resolved = {key: self.resolve(key, rule) for key, rule in declared.items()}
        logger.debug(f"Resolved {len(resolved)} casts on {self.model_class.__qualname__}")
        return resolved

    @staticmethod
    def resolve(key: str, rule: Any) -> Any:
        """Resolve a cast declaration to a cast object."""
        from apiresource.Resource.Model import Model

        if isinstance(rule, str):
            cast_class = BUILTIN_CASTS.get(rule.strip().lower())
            if cast_class is None:
                raise InvalidCast(key, rule)
            return cast_class()

        if isinstance(rule, (list, tuple)):
            if len(rule) == 1 and inspect.isclass(rule[0]) and issubclass(rule[0], Model):
                return ModelCollectionCast(rule[0])
            raise InvalidCast(key, rule)

        if inspect.isclass(rule):
            if issubclass(rule, Model):
                return ModelCast(rule)
            if issubclass(rule, Enum):
                return EnumCast(rule)
            if hasattr(rule, 'get') and hasattr(rule, 'set'):
                return rule()
            raise InvalidCast(key, rule)

        if isinstance(rule, CastInterface):
            return rule

        raise InvalidCast(key, rule)
