from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Type

from apiresource.Exceptions import CastFailure
from apiresource.Support import Json


class ModelCast:
    """
    Cast for a nested model.

    Reads hydrate an instance of the declared model from the stored dict,
    writes store the instance's raw attributes.
    """

    rule = 'model'
    caches_objects = True

    def __init__(self, model_class: Type[Any]) -> None:
        self.model_class = model_class

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None or isinstance(value, self.model_class):
            return value

        # Another model class is re-hydrated from its raw attributes
        if hasattr(value, 'get_attributes'):
            return self.model_class.new_trusted(value.get_attributes())

        if isinstance(value, (str, bytes, bytearray)):
            value = _decode(key, value, self.rule)

        if isinstance(value, Mapping):
            return self.model_class.new_trusted(dict(value))

        raise CastFailure(key, value, self.model_class.__name__)

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if value is None:
            return None

        if hasattr(value, 'get_attributes'):
            return value.get_attributes()

        if isinstance(value, (str, bytes, bytearray)):
            value = _decode(key, value, self.rule)

        if isinstance(value, Mapping):
            return dict(value)

        raise CastFailure(key, value, self.model_class.__name__)

    def is_hydrated(self, value: Any) -> bool:
        """Determine whether a value is already an instance of the declared model."""
        return isinstance(value, self.model_class)


class ModelCollectionCast:
    """
    Cast for a list of nested models.

    Reads wrap the stored list in a Collection of the declared model, writes
    store a list of raw attribute dicts.
    """

    rule = 'collection'
    caches_objects = True

    def __init__(self, model_class: Type[Any]) -> None:
        self.model_class = model_class

    def get(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        from apiresource.Resource.Collection import Collection

        if value is None or isinstance(value, Collection):
            return value

        if isinstance(value, (str, bytes, bytearray)):
            value = _decode(key, value, self.rule)

        if isinstance(value, (list, tuple)):
            return Collection.make_of(self.model_class, value)

        raise CastFailure(key, value, f"{self.model_class.__name__}[]")

    def set(self, model: Any, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[List[Any]]:
        from apiresource.Resource.Collection import Collection

        if value is None:
            return None

        if isinstance(value, Collection):
            return value.to_raw()

        if isinstance(value, (list, tuple)):
            return [self._raw_item(key, item) for item in value]

        raise CastFailure(key, value, f"{self.model_class.__name__}[]")

    def is_hydrated(self, value: Any) -> bool:
        """Determine whether a value is already a collection of the declared model."""
        from apiresource.Resource.Collection import Collection

        return isinstance(value, Collection) and issubclass(value.model_class, self.model_class)

    def _raw_item(self, key: str, item: Any) -> Any:
        if hasattr(item, 'get_attributes'):
            return item.get_attributes()
        if isinstance(item, Mapping):
            return dict(item)
        raise CastFailure(key, item, self.model_class.__name__)


def collection_of(model_class: Type[Any]) -> ModelCollectionCast:
    """Declare an attribute as a list of nested models."""
    return ModelCollectionCast(model_class)


def _decode(key: str, value: Any, rule: str) -> Any:
    try:
        return Json.decode(value)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CastFailure(key, value, rule) from e
