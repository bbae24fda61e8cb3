from __future__ import annotations

from .Model import Model
from .Collection import Collection
from .Filter import Filter
from .Serializer import Serializer

__all__ = ['Model', 'Collection', 'Filter', 'Serializer']
