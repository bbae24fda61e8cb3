"""
REST resources as typed local models.

    from apiresource import Model, Resource, Client

    class User(Resource):
        fillable = ['name', 'email', 'birthday']
        casts = {'birthday': 'date'}

    Client.create(base_url='https://api.example.com')
    user = User.find(1)
"""

from __future__ import annotations

from .Exceptions import (
    CastFailure,
    GuardRejection,
    InvalidCast,
    MissingValue,
    ResourceException,
    UnknownOperation,
)
from .Attributes import Attribute, FillableGuard
from .Casts import CastInterface
from .Resource import Collection, Filter, Model
from .Http import Client, ClientOptions, Resource

__all__ = [
    'Attribute',
    'CastFailure',
    'CastInterface',
    'Client',
    'ClientOptions',
    'Collection',
    'FillableGuard',
    'Filter',
    'GuardRejection',
    'InvalidCast',
    'MissingValue',
    'Model',
    'Resource',
    'ResourceException',
    'UnknownOperation',
]
