from __future__ import annotations

import json
import operator as op
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')


class CollectionMacro:
    """Macro for extending collection functionality."""

    def __init__(self, name: str, method: Callable[..., Any]):
        self.name = name
        self.method = method


class Collection(Generic[T]):
    """Laravel-style collection."""

    _macros: Dict[str, CollectionMacro] = {}

    def __init__(self, items: Union[List[T], Iterable[T], None] = None):
        if items is None:
            self._items: List[T] = []
        elif isinstance(items, list):
            self._items = items.copy()
        else:
            self._items = list(items)

    @classmethod
    def make(cls, items: Union[List[T], Iterable[T], None] = None) -> 'Collection[T]':
        """Create a new collection instance."""
        return cls(items)

    def _new(self, items: Iterable[Any]) -> 'Collection[Any]':
        """Create a collection of the same kind."""
        return self.__class__(items)

    # Core methods
    def all(self) -> List[T]:
        """Get all items as a list."""
        return self._items.copy()

    def count(self) -> int:
        """Get the number of items."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Check if the collection is empty."""
        return len(self._items) == 0

    def is_not_empty(self) -> bool:
        """Check if the collection is not empty."""
        return not self.is_empty()

    def push(self, *items: T) -> 'Collection[T]':
        """Add items to the end of the collection."""
        self._items.extend(items)
        return self

    def first(self, callback: Optional[Callable[[T], bool]] = None, default: Any = None) -> Any:
        """Get the first item, optionally the first passing a truth test."""
        for item in self._items:
            if callback is None or callback(item):
                return item
        return default

    def last(self, callback: Optional[Callable[[T], bool]] = None, default: Any = None) -> Any:
        """Get the last item, optionally the last passing a truth test."""
        for item in reversed(self._items):
            if callback is None or callback(item):
                return item
        return default

    # Filtering and searching
    def filter(self, callback: Optional[Callable[[T], bool]] = None) -> 'Collection[T]':
        """Filter items using a callback."""
        if callback is None:
            # Filter out falsy values
            return self._new(item for item in self._items if item)

        return self._new(item for item in self._items if callback(item))

    def reject(self, callback: Callable[[T], bool]) -> 'Collection[T]':
        """Filter out items using a callback."""
        return self._new(item for item in self._items if not callback(item))

    def where(self, key: str, operator: Any = None, value: Any = None) -> 'Collection[T]':
        """Filter items by a key-value pair, ``where(key, value)`` or ``where(key, op, value)``."""
        if value is None:
            value, operator = operator, '='

        return self.filter(lambda item: self._compare_values(
            self._get_item_value(item, key), operator, value
        ))

    # Transformation
    def map(self, callback: Callable[[T], U]) -> 'Collection[U]':
        """Map each item through a callback."""
        return Collection([callback(item) for item in self._items])

    def each(self, callback: Callable[[T], Any]) -> 'Collection[T]':
        """Run a callback over each item, stopping when it returns False."""
        for item in self._items:
            if callback(item) is False:
                break
        return self

    def pluck(self, value: str, key: Optional[str] = None) -> Union['Collection[Any]', Dict[Any, Any]]:
        """Get the values of a given key."""
        if key is None:
            return Collection([self._get_item_value(item, value) for item in self._items])
        return {
            self._get_item_value(item, key): self._get_item_value(item, value)
            for item in self._items
        }

    def sort_by(self, key: Union[str, Callable[[T], Any]], reverse: bool = False) -> 'Collection[T]':
        """Sort items by a key or callback."""
        if isinstance(key, str):
            attr = key
            return self._new(sorted(self._items, key=lambda item: self._get_item_value(item, attr), reverse=reverse))
        return self._new(sorted(self._items, key=key, reverse=reverse))

    def reduce(self, callback: Callable[[Any, T], Any], initial: Any = None) -> Any:
        """Reduce the collection to a single value."""
        result = initial
        for item in self._items:
            result = callback(result, item)
        return result

    # Serialization
    def to_dict(self) -> List[Any]:
        """Convert collection to a list of plain values."""
        result = []
        for item in self._items:
            if hasattr(item, 'to_dict'):
                result.append(item.to_dict())
            else:
                result.append(item)
        return result

    def to_json(self) -> str:
        """Convert collection to JSON."""
        return json.dumps(self.to_dict(), default=str)

    def to_list(self) -> List[T]:
        """Convert to list."""
        return self.all()

    # Magic methods
    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, key: Union[int, slice]) -> Any:
        if isinstance(key, slice):
            return self._new(self._items[key])
        return self._items[key]

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items})"

    # Helper methods
    def _get_item_value(self, item: Any, key: str) -> Any:
        """Get value from item by key."""
        if isinstance(item, dict):
            return item.get(key)
        if hasattr(item, 'get_attribute'):
            return item.get_attribute(key)
        return getattr(item, key, None)

    def _compare_values(self, left: Any, operator: str, right: Any) -> bool:
        """Compare two values using an operator."""
        operators_map = {
            '=': op.eq,
            '==': op.eq,
            '!=': op.ne,
            '<>': op.ne,
            '<': op.lt,
            '<=': op.le,
            '>': op.gt,
            '>=': op.ge,
        }

        op_func = operators_map.get(operator)
        if op_func:
            return bool(op_func(left, right))

        return False

    # Macro system
    @classmethod
    def macro(cls, name: str, method: Callable[..., Any]) -> None:
        """Add a macro to the collection."""
        cls._macros[name] = CollectionMacro(name, method)

    def __getattr__(self, name: str) -> Any:
        """Handle macro calls."""
        if name.startswith('_'):
            raise AttributeError(name)

        if name in self._macros:
            macro = self._macros[name]

            def macro_method(*args: Any, **kwargs: Any) -> Any:
                return macro.method(self, *args, **kwargs)

            return macro_method

        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")


def collect(items: Union[List[T], Iterable[T], None] = None) -> Collection[T]:
    """Create a collection instance."""
    return Collection.make(items)
