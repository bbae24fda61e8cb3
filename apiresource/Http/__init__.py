from __future__ import annotations

from .Schemas import ClientOptions
from .Client import Client
from .Resource import Resource

__all__ = ['ClientOptions', 'Client', 'Resource']
