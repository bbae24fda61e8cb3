from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Type

from apiresource.Exceptions import CastFailure
from apiresource.Support import Json
from apiresource.Support.Collection import Collection as BaseCollection

if TYPE_CHECKING:
    from apiresource.Resource.Model import Model


class Collection(BaseCollection['Model']):
    """Collection of resource models of a single type."""

    def __init__(self, items: Optional[Iterable[Any]] = None, model_class: Optional[Type['Model']] = None):
        if model_class is None:
            from apiresource.Resource.Model import Model
            model_class = Model
        self.model_class: Type['Model'] = model_class
        super().__init__([self._make_item(item) for item in (items or [])])

    @classmethod
    def make_of(cls, model_class: Type['Model'], items: Optional[Iterable[Any]] = None) -> 'Collection':
        """Create a collection whose items are instances of the given model."""
        return cls(items, model_class)

    def _new(self, items: Iterable[Any]) -> 'Collection':
        return self.__class__(items, self.model_class)

    def add(self, item: Any) -> 'Collection':
        """Add an item, hydrating dicts as the collection's model."""
        self._items.append(self._make_item(item))
        return self

    def push(self, *items: Any) -> 'Collection':
        for item in items:
            self.add(item)
        return self

    def find(self, key: Any, default: Any = None) -> Any:
        """Find a model by its primary key."""
        return self.first(lambda model: model.get_key() == key, default)

    def model_keys(self) -> List[Any]:
        """Get the primary keys of every model."""
        return [model.get_key() for model in self._items]

    def all_visible(self) -> List[Dict[str, Any]]:
        """Project every model through its visible set."""
        return [model.to_visible_dict() for model in self._items]

    def to_dict(self) -> List[Dict[str, Any]]:
        return [model.to_dict() for model in self._items]

    def to_raw(self) -> List[Dict[str, Any]]:
        """Get the raw attributes of every model."""
        return [model.get_attributes() for model in self._items]

    def to_json(self, visible: bool = False, **kwargs: Any) -> str:  # type: ignore[override]
        data = self.all_visible() if visible else self.to_dict()
        return Json.encode(data, **kwargs)

    def _make_item(self, item: Any) -> 'Model':
        from apiresource.Resource.Model import Model

        if isinstance(item, Model):
            return item
        if isinstance(item, Mapping):
            return self.model_class.new_trusted(dict(item))
        raise CastFailure(None, item, self.model_class.__name__)

    def __repr__(self) -> str:
        return f"Collection<{self.model_class.__name__}>({self._items})"
