from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, ClassVar, Iterable, Iterator, List, Type

from apiresource.Exceptions import GuardRejection

logger = logging.getLogger(__name__)


class FillableGuard:
    """
    Mass assignment policy of a model class.

    A name listed in ``fillable`` is always accepted. Otherwise it is rejected
    when ``guarded`` is ``['*']`` or lists it, and accepted when ``fillable`` is
    empty. Names starting with an underscore are never mass assignable.
    """

    # Process-wide switch, see ``unguarded``
    _unguarded: ClassVar[bool] = False

    def __init__(self, model_class: Type[Any]) -> None:
        self.model_class = model_class

    @property
    def fillable(self) -> List[str]:
        return list(getattr(self.model_class, 'fillable', None) or [])

    @property
    def guarded(self) -> List[str]:
        return list(getattr(self.model_class, 'guarded', None) or [])

    def is_fillable(self, key: str) -> bool:
        """Determine if the given attribute may be mass assigned."""
        if FillableGuard._unguarded:
            return True

        if key in self.fillable:
            return True

        if self.is_guarded(key):
            return False

        return not self.fillable and not key.startswith('_')

    def is_guarded(self, key: str) -> bool:
        """Determine if the given attribute is guarded."""
        guarded = self.guarded
        return guarded == ['*'] or key in guarded

    def totally_guarded(self) -> bool:
        """Determine if the model is totally guarded."""
        return not self.fillable and self.guarded == ['*']

    def authorize(self, key: str) -> None:
        """
        Validate a single attribute for mass assignment.

        @raise GuardRejection: when the attribute is not fillable
        """
        if not self.is_fillable(key):
            logger.debug(f"Rejected mass assignment of `{key}` on {self.model_class.__qualname__}")
            raise GuardRejection(key, self.model_class.__name__)

    def authorize_all(self, keys: Iterable[str]) -> None:
        """Validate every attribute of a fill before any is written."""
        for key in keys:
            self.authorize(key)

    @classmethod
    def unguard(cls, state: bool = True) -> None:
        """Disable all mass assignable restrictions."""
        cls._unguarded = state

    @classmethod
    def reguard(cls) -> None:
        """Enable the mass assignment restrictions."""
        cls._unguarded = False

    @classmethod
    def is_unguarded(cls) -> bool:
        return cls._unguarded

    @classmethod
    @contextmanager
    def unguarded(cls) -> Iterator[None]:
        """Run a block with mass assignment restrictions disabled."""
        if cls._unguarded:
            yield
            return

        cls.unguard()
        try:
            yield
        finally:
            cls.reguard()
