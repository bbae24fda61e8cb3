from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple, Type

from apiresource.Support.Registry import registry
from apiresource.Support.Str import Str

logger = logging.getLogger(__name__)

GET_MUTATOR_PATTERN: Pattern[str] = re.compile(r'^get_(?P<name>\w+?)_attribute$')
SET_MUTATOR_PATTERN: Pattern[str] = re.compile(r'^set_(?P<name>\w+?)_attribute$')


class Attribute:
    """
    Laravel 9+ style attribute definition for accessors and mutators.

    Declared as a class attribute, the attribute name is the name it is bound to:

        class User(Model):
            full_name = Attribute.make(
                get=lambda model, value: f"{model.first_name} {model.last_name}",
            )

    The getter receives the raw stored value (and optionally the model first).
    The setter returns the value stored under the same name, or a dict of
    ``{key: value}`` pairs to store instead.
    """

    def __init__(
        self,
        get: Optional[Callable[..., Any]] = None,
        set: Optional[Callable[..., Any]] = None,
    ) -> None:
        self._get = get
        self._set = set
        self.name: Optional[str] = None
        self._get_wants_model = self._accepts_model_parameter(get) if get else False
        self._set_wants_model = self._accepts_model_parameter(set) if set else False

    @classmethod
    def make(
        cls,
        get: Optional[Callable[..., Any]] = None,
        set: Optional[Callable[..., Any]] = None,
    ) -> 'Attribute':
        """Laravel-style factory method for creating Attribute instances."""
        return cls(get, set)

    @property
    def has_getter(self) -> bool:
        return self._get is not None

    @property
    def has_setter(self) -> bool:
        return self._set is not None

    def get_value(self, model: Any, raw_value: Any) -> Any:
        """Get the transformed attribute value using the accessor."""
        if self._get is None:
            return raw_value
        if self._get_wants_model:
            return self._get(model, raw_value)
        return self._get(raw_value)

    def set_value(self, model: Any, value: Any) -> Any:
        """Get the value (or key/value pairs) to store using the mutator."""
        if self._set is None:
            return value
        if self._set_wants_model:
            return self._set(model, value)
        return self._set(value)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.get_attribute(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.set_attribute(self.name, value)

    def __delete__(self, instance: Any) -> None:
        instance.forget_attribute(self.name)

    @staticmethod
    def _accepts_model_parameter(func: Callable[..., Any]) -> bool:
        """Check if the function accepts a model parameter."""
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return False
        positional = [
            p for p in signature.parameters.values()
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        return len(positional) >= 2


# A resolved mutator: the method name on the model, or an Attribute object
MutatorTarget = Any


@dataclass
class MutatorTable:
    """Resolved accessors and mutators of a single model class."""

    getters: Dict[str, MutatorTarget] = field(default_factory=dict)
    setters: Dict[str, MutatorTarget] = field(default_factory=dict)
    mutated: List[str] = field(default_factory=list)

    @classmethod
    def discover(cls, model_class: type) -> 'MutatorTable':
        """Scan a model class once for accessor and mutator declarations."""
        table = cls()
        snake = bool(getattr(model_class, 'snake_attributes', False))

        for name, member in cls._members(model_class):
            if isinstance(member, Attribute):
                forms = cls._name_forms(name, snake)
                # The descriptor itself reads and writes under its declared name
                declared = [] if name in forms else [name]
                if member.has_getter:
                    table._register(table.getters, forms, member, mutated=True)
                    table._register(table.getters, declared, member)
                if member.has_setter:
                    table._register(table.setters, forms + declared, member)
                continue

            if not callable(member):
                continue

            match = GET_MUTATOR_PATTERN.match(name)
            if match:
                forms = cls._name_forms(match.group('name'), snake)
                table._register(table.getters, forms, name, mutated=True)
                continue

            match = SET_MUTATOR_PATTERN.match(name)
            if match:
                forms = cls._name_forms(match.group('name'), snake)
                table._register(table.setters, forms, name)

        logger.debug(
            f"Discovered {len(table.getters)} accessors and {len(table.setters)} "
            f"mutators on {model_class.__qualname__}"
        )
        return table

    @staticmethod
    def _members(model_class: type) -> List[Tuple[str, Any]]:
        """Get class members in declaration order, base classes first."""
        members: Dict[str, Any] = {}
        for klass in reversed(model_class.__mro__):
            for name, member in vars(klass).items():
                if isinstance(member, (staticmethod, classmethod)):
                    continue
                members[name] = member
        return list(members.items())

    @staticmethod
    def _name_forms(token: str, snake: bool) -> List[str]:
        """Get the attribute names a mutator token answers to."""
        snake_name = Str.snake(token)
        if snake:
            return [snake_name]
        camel_name = Str.camel(snake_name)
        return [snake_name] if camel_name == snake_name else [snake_name, camel_name]

    def _register(
        self,
        target: Dict[str, MutatorTarget],
        forms: List[str],
        mutator: MutatorTarget,
        mutated: bool = False,
    ) -> None:
        for form in forms:
            target[form] = mutator
            if mutated and form not in self.mutated:
                self.mutated.append(form)


class MutatorResolver:
    """
    Accessor/mutator lookup for a model class.

    The mutator table of each class is computed on first query and kept in the
    shared registry until ``reset`` is called for that class.
    """

    BUCKET = 'mutators'

    def __init__(self, model_class: Type[Any]) -> None:
        self.model_class = model_class

    @property
    def table(self) -> MutatorTable:
        return registry.remember(
            self.BUCKET, self.model_class, lambda: MutatorTable.discover(self.model_class)
        )

    def has_get_mutator(self, key: str) -> bool:
        """Determine if a get mutator exists for an attribute."""
        return key in self.table.getters

    def has_set_mutator(self, key: str) -> bool:
        """Determine if a set mutator exists for an attribute."""
        return key in self.table.setters

    def get_mutated_attributes(self) -> List[str]:
        """Get the attribute names that have a get mutator."""
        return list(self.table.mutated)

    def invoke_get_mutator(self, model: Any, key: str, value: Any) -> Any:
        """Get the value of an attribute using its get mutator."""
        mutator = self.table.getters[key]
        if isinstance(mutator, Attribute):
            return mutator.get_value(model, value)
        return getattr(model, mutator)(value)

    def invoke_set_mutator(self, model: Any, key: str, value: Any) -> Any:
        """Set the value of an attribute using its set mutator."""
        mutator = self.table.setters[key]
        if not isinstance(mutator, Attribute):
            return getattr(model, mutator)(value)

        result = mutator.set_value(model, value)
        pairs = result if isinstance(result, dict) else {key: result}
        for name, stored in pairs.items():
            model.store_raw(name, stored)
        return result

    def reset(self) -> None:
        """Forget the cached mutator table of this class only."""
        registry.forget(self.BUCKET, self.model_class)
