from __future__ import annotations

from .CastInterface import CastInterface
from .PrimitiveCasts import BooleanCast, FloatCast, IntegerCast, StringCast
from .JsonCast import ArrayCast, JsonCast, ObjectCast
from .DateCast import DateCast, DateTimeCast, TimestampCast
from .EnumCast import EnumCast, enum_cast
from .ModelCast import ModelCast, ModelCollectionCast, collection_of
from .CastManager import BUILTIN_CASTS, CastManager

__all__ = [
    'CastInterface',
    'BooleanCast',
    'FloatCast',
    'IntegerCast',
    'StringCast',
    'ArrayCast',
    'JsonCast',
    'ObjectCast',
    'DateCast',
    'DateTimeCast',
    'TimestampCast',
    'EnumCast',
    'enum_cast',
    'ModelCast',
    'ModelCollectionCast',
    'collection_of',
    'BUILTIN_CASTS',
    'CastManager',
]
