from __future__ import annotations

from .Collection import Collection, collect
from .Registry import CacheRegistry, registry
from .Str import Str

__all__ = ['Collection', 'collect', 'CacheRegistry', 'registry', 'Str']
