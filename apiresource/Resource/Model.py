from __future__ import annotations

import inspect
import logging
import re
from datetime import datetime
from functools import partial
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Mapping, Optional, Pattern, Type, TypeVar

from apiresource.Attributes.AccessorMutator import MutatorResolver
from apiresource.Attributes.AttributeStore import AttributeStore
from apiresource.Attributes.FillableGuard import FillableGuard
from apiresource.Casts import Temporal
from apiresource.Casts.CastManager import CastManager
from apiresource.Exceptions import CastFailure, UnknownOperation
from apiresource.Resource.Serializer import Serializer
from apiresource.Support.Str import Str
from apiresource.config import settings

ModelT = TypeVar('ModelT', bound='Model')

logger = logging.getLogger(__name__)

SNAKE_SETTER: Pattern[str] = re.compile(r'^set_(?P<name>\w+)$')
CAMEL_SETTER: Pattern[str] = re.compile(r'^set(?P<name>[A-Z]\w*)$')


class Model:
    """
    Attribute bag of a remote REST resource.

    Attributes are read and written like plain fields. Reads go through the
    attribute's get mutator, else its cast rule; writes go through the
    fillable guard, then the set mutator, else the cast rule.

        class Invoice(Model):
            fillable = ['number', 'issued_at', 'items']
            casts = {'issued_at': 'date', 'items': [Item]}

            def get_number_attribute(self, value):
                return f"INV-{value}"
    """

    # Indicates whether attributes are snake cased on arrays
    snake_attributes: ClassVar[bool] = settings.SNAKE_ATTRIBUTES

    # The primary key for the model and its type
    primary_key: ClassVar[Dict[str, str]] = {'id': 'int'}

    # The storage format of the model's date attributes
    date_format: ClassVar[str] = settings.DATE_FORMAT

    casts: ClassVar[Dict[str, Any]] = {}
    visible: ClassVar[List[str]] = []
    fillable: ClassVar[List[str]] = []
    guarded: ClassVar[List[str]] = []

    _attributes: AttributeStore
    _object_cache: Dict[str, Any]
    _primary_key: Dict[str, str]
    _date_format: Optional[str]

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        object.__setattr__(self, '_attributes', AttributeStore())
        object.__setattr__(self, '_object_cache', {})
        object.__setattr__(self, '_primary_key', dict(type(self).primary_key))
        object.__setattr__(self, '_date_format', None)

        self.fill(attributes or {})

    @classmethod
    def new_trusted(cls: Type[ModelT], attributes: Optional[Mapping[str, Any]] = None) -> ModelT:
        """Create an instance from already verified raw attributes."""
        instance = cls()
        instance.set_raw_attributes(attributes or {})
        return instance

    def new_instance(self: ModelT, attributes: Optional[Mapping[str, Any]] = None, trusted: bool = False) -> ModelT:
        """Create a new instance of the same model."""
        if trusted:
            return type(self).new_trusted(attributes)
        return type(self)(attributes)

    # Components
    @classmethod
    def _mutators(cls) -> MutatorResolver:
        return MutatorResolver(cls)

    @classmethod
    def _casts(cls) -> CastManager:
        return CastManager(cls)

    @classmethod
    def _guard(cls) -> FillableGuard:
        return FillableGuard(cls)

    # Primary key
    def get_key(self) -> Any:
        """Get the value of the model's primary key."""
        return self.get_attribute(self.get_key_name())

    def set_key(self: ModelT, value: Any) -> ModelT:
        """Set the value of the model's primary key."""
        self.store_raw(self.get_key_name(), value)
        return self

    def get_key_name(self) -> str:
        """Get the primary key name for the model."""
        return next(iter(self._primary_key))

    def get_key_type(self) -> str:
        """Get the primary key type for the model."""
        return next(iter(self._primary_key.values()))

    def set_key_name(self: ModelT, key: str, key_type: str = 'int') -> ModelT:
        """Set the primary key for the model."""
        object.__setattr__(self, '_primary_key', {key: key_type})
        return self

    # Reading
    def get_attribute(self, key: str) -> Any:
        """Get an attribute from the model."""
        if not key:
            return None

        value = self._attributes.get(key)

        # A get mutator wins over any cast, it receives the raw stored value
        mutators = self._mutators()
        if mutators.has_get_mutator(key):
            return mutators.invoke_get_mutator(self, key, value)

        if self._casts().has_cast(key):
            return self._cast_attribute(key, value)

        return value

    def _cast_attribute(self, key: str, value: Any) -> Any:
        casts = self._casts()
        if not casts.caches_objects(key):
            return casts.cast_on_read(self, key, value)

        if key in self._object_cache:
            return self._object_cache[key]

        hydrated = casts.cast_on_read(self, key, value)
        if hydrated is not None:
            self._object_cache[key] = hydrated
        return hydrated

    def get_attributes(self) -> Dict[str, Any]:
        """Get all of the current raw attributes on the model."""
        self._merge_object_cache()
        return self._attributes.all()

    def get_raw_attributes(self) -> Dict[str, Any]:
        """Get the stored attributes without merging hydrated objects back."""
        return self._attributes.all()

    def has_attribute(self, key: str) -> bool:
        """Determine if an attribute is present, even when it holds None."""
        return self._attributes.has(key)

    def _merge_object_cache(self) -> None:
        casts = self._casts()
        for key, hydrated in self._object_cache.items():
            self._attributes.set(key, casts.cast_on_write(self, key, hydrated))

    # Writing
    def set_attribute(self: ModelT, key: str, value: Any) -> ModelT:
        """Set a given attribute on the model."""
        self._guard().authorize(key)
        return self._assign(key, value)

    def _assign(self: ModelT, key: str, value: Any) -> ModelT:
        # A set mutator decides on its own what, if anything, is stored
        mutators = self._mutators()
        if mutators.has_set_mutator(key):
            mutators.invoke_set_mutator(self, key, value)
            return self

        casts = self._casts()
        if not casts.has_cast(key):
            self.store_raw(key, value)
            return self

        # Keep assigned objects so later in-place changes are merged back
        keep = casts.keeps_object(key, value)

        self.store_raw(key, casts.cast_on_write(self, key, value))
        if keep:
            self._object_cache[key] = value
        return self

    def store_raw(self: ModelT, key: str, value: Any) -> ModelT:
        """Write a raw value to the attribute store, bypassing guard, mutators and casts."""
        self._object_cache.pop(key, None)
        self._attributes.set(key, value)
        return self

    def forget_attribute(self: ModelT, key: str) -> ModelT:
        """Remove an attribute from the model."""
        self._object_cache.pop(key, None)
        self._attributes.forget(key)
        return self

    def set_raw_attributes(self: ModelT, attributes: Mapping[str, Any]) -> ModelT:
        """Replace every raw attribute, bypassing guard, mutators and casts."""
        self._object_cache.clear()
        self._attributes.replace(attributes)
        return self

    def fill(self: ModelT, attributes: Mapping[str, Any]) -> ModelT:
        """
        Fill the model with a dict of attributes.

        Every key is authorized before any is written; a rejected key or a
        failed write of any kind leaves the model as it was.

        @raise GuardRejection: when a key is not mass assignable
        """
        self._guard().authorize_all(attributes.keys())

        snapshot = (self._attributes.all(), dict(self._object_cache))
        try:
            for key, value in attributes.items():
                self._assign(key, value)
        except Exception:
            self._attributes.replace(snapshot[0])
            object.__setattr__(self, '_object_cache', snapshot[1])
            raise

        return self

    def force_fill(self: ModelT, attributes: Mapping[str, Any]) -> ModelT:
        """Fill the model with attributes, bypassing the fillable guard."""
        with FillableGuard.unguarded():
            return self.fill(attributes)

    # Mass assignment
    @classmethod
    def is_fillable(cls, key: str) -> bool:
        return cls._guard().is_fillable(key)

    @classmethod
    def unguard(cls, state: bool = True) -> None:
        """Disable all mass assignable restrictions."""
        FillableGuard.unguard(state)

    @classmethod
    def reguard(cls) -> None:
        """Enable the mass assignment restrictions."""
        FillableGuard.reguard()

    @classmethod
    def unguarded(cls) -> Any:
        """Context manager running a block with mass assignment restrictions disabled."""
        return FillableGuard.unguarded()

    # Mutators
    def has_get_mutator(self, key: str) -> bool:
        """Determine if a get mutator exists for an attribute."""
        return self._mutators().has_get_mutator(key)

    def has_set_mutator(self, key: str) -> bool:
        """Determine if a set mutator exists for an attribute."""
        return self._mutators().has_set_mutator(key)

    def get_mutated_attributes(self) -> List[str]:
        """Get the mutated attributes for the model."""
        return self._mutators().get_mutated_attributes()

    @classmethod
    def reset_mutator_cache(cls) -> None:
        """Forget the mutator cache of this class."""
        cls._mutators().reset()

    # Casts
    def has_cast(self, key: str) -> bool:
        """Determine whether an attribute should be cast to a native type."""
        return self._casts().has_cast(key)

    def get_casts(self) -> Dict[str, Any]:
        """Get the resolved cast objects."""
        return dict(self._casts().casts)

    def cast_on_read(self, key: str, value: Any) -> Any:
        """Cast a stored value to its runtime value."""
        return self._casts().cast_on_read(self, key, value)

    def cast_on_write(self, key: str, value: Any) -> Any:
        """Cast a runtime value to its stored value."""
        return self._casts().cast_on_write(self, key, value)

    # Dates
    def get_date_format(self) -> str:
        """Get the format for stored dates."""
        return self._date_format or type(self).date_format

    def set_date_format(self: ModelT, date_format: str) -> ModelT:
        """Set the date format used by the model."""
        object.__setattr__(self, '_date_format', date_format)
        return self

    def as_datetime(self, value: Any) -> datetime:
        """Return a timestamp as a datetime object."""
        try:
            return Temporal.as_datetime(value, self.get_date_format())
        except ValueError as e:
            raise CastFailure(None, value, 'datetime') from e

    def from_datetime(self, value: Any) -> Optional[str]:
        """Convert a date/time value to its stored text form."""
        if value is None:
            return None
        return self.serialize_date(self.as_datetime(value))

    def serialize_date(self, value: datetime) -> str:
        """Prepare a date for array / JSON serialization."""
        return Temporal.to_utc(value).strftime(self.get_date_format())

    # Serialization
    @classmethod
    def get_visible(cls) -> List[str]:
        """Get the visible attributes for the model."""
        return list(cls.visible)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model's attributes to a dict."""
        return Serializer(self).to_dict()

    def to_visible_dict(self) -> Dict[str, Any]:
        """Convert the visible attributes and the primary key to a dict."""
        return Serializer(self).to_visible_dict()

    def to_json(self, visible: bool = False, **kwargs: Any) -> str:
        """Convert the model to its JSON representation."""
        return Serializer(self).to_json(visible, **kwargs)

    # Dynamic dispatch
    @classmethod
    def macro(cls, name: str, handler: Callable[..., Any]) -> None:
        """Register an extension handler on this class and its subclasses."""
        if '_macros' not in cls.__dict__:
            cls._macros = {}
        cls._macros[name] = handler

    @classmethod
    def has_macro(cls, name: str) -> bool:
        return cls._find_macro(name) is not None

    @classmethod
    def flush_macros(cls) -> None:
        """Remove the handlers registered on this class."""
        cls.__dict__.get('_macros', {}).clear()

    @classmethod
    def _find_macro(cls, name: str) -> Optional[Callable[..., Any]]:
        for klass in cls.__mro__:
            handlers = klass.__dict__.get('_macros')
            if handlers and name in handlers:
                return handlers[name]  # type: ignore[no-any-return]
        return None

    def call(self, method: str, *params: Any) -> Any:
        """
        Dynamically handle a call by name.

        ``set_<name>`` / ``set<Name>`` assign the attribute (True when no value
        is given); anything else must be a registered macro.

        @raise UnknownOperation: when nothing handles the name
        """
        member = inspect.getattr_static(self, method, None) if not method.startswith('_') else None
        if member is not None and callable(getattr(self, method, None)):
            return getattr(self, method)(*params)

        key = self._setter_key(method)
        if key is not None:
            value = params[0] if params else True
            mutators = self._mutators()
            if mutators.has_set_mutator(key):
                mutators.invoke_set_mutator(self, key, value)
                return self
            return self.set_attribute(key, value)

        handler = type(self)._find_macro(method)
        if handler is None:
            logger.debug(f"Unknown operation {method} on {type(self).__qualname__}")
            raise UnknownOperation(method, type(self).__name__)
        return handler(self, *params)

    @classmethod
    def call_static(cls, method: str, *params: Any) -> Any:
        """Dynamically handle a class-level call through a registered macro."""
        handler = cls._find_macro(method)
        if handler is None:
            raise UnknownOperation(method, cls.__name__)
        return handler(cls, *params)

    @staticmethod
    def _setter_key(method: str) -> Optional[str]:
        match = SNAKE_SETTER.match(method)
        if match:
            return match.group('name')
        match = CAMEL_SETTER.match(method)
        if match:
            return Str.lcfirst(match.group('name'))
        return None

    # Attribute syntax
    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)

        handler = type(self)._find_macro(name)
        if handler is not None:
            return partial(handler, self)

        return self.get_attribute(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_') or hasattr(inspect.getattr_static(type(self), name, None), '__set__'):
            object.__setattr__(self, name, value)
            return
        self.set_attribute(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith('_') or hasattr(inspect.getattr_static(type(self), name, None), '__delete__'):
            object.__delattr__(self, name)
            return
        self.forget_attribute(name)

    def __getitem__(self, key: str) -> Any:
        return self.get_attribute(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_attribute(key, value)

    def __delitem__(self, key: str) -> None:
        self.forget_attribute(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._attributes.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes.all())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self.get_attributes() == other.get_attributes()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._attributes.all()}>"
