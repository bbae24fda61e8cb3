from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List

from apiresource.Support import Json

if TYPE_CHECKING:
    from apiresource.Resource.Model import Model


class Serializer:
    """
    Plain-data projections of a model.

    Every attribute goes through the model's read pipeline (get mutator, else
    cast, else raw value) before nested models, collections and dates are
    reduced to plain data. Nested models are always projected through their
    visible set.
    """

    def __init__(self, model: 'Model') -> None:
        self.model = model

    def to_dict(self) -> Dict[str, Any]:
        """Project every attribute."""
        return self._attributes_to_dict(self.model.get_attributes())

    def to_visible_dict(self) -> Dict[str, Any]:
        """Project the visible attributes and the primary key."""
        return self._attributes_to_dict(self.visible_attributes())

    def to_json(self, visible: bool = False, **kwargs: Any) -> str:
        """Render a projection as JSON text."""
        data = self.to_visible_dict() if visible else self.to_dict()
        return Json.encode(data, **kwargs)

    def visible_attributes(self) -> Dict[str, Any]:
        """Get the raw attributes restricted to the visible set."""
        attributes = self.model.get_attributes()
        visible: List[str] = list(self.model.get_visible())

        if visible == ['*']:
            return attributes

        allowed = set(visible)
        allowed.add(self.model.get_key_name())

        return {key: value for key, value in attributes.items() if key in allowed}

    def _attributes_to_dict(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: self._serialize_value(self.model.get_attribute(key))
            for key in attributes
        }

    def _serialize_value(self, value: Any) -> Any:
        from apiresource.Resource.Collection import Collection
        from apiresource.Resource.Model import Model

        if isinstance(value, Collection):
            return value.all_visible()
        if isinstance(value, Model):
            return value.to_visible_dict()
        if isinstance(value, datetime):
            return self.model.serialize_date(value)
        if isinstance(value, list):
            return [self._serialize_value(item) for item in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return value
