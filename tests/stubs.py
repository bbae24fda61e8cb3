from __future__ import annotations

import hashlib
import json
from enum import Enum
from typing import Any, ClassVar, Dict, List

from apiresource import Attribute, Model, Resource


class ResourceModelStub(Model):

    def get_list_items_attribute(self, value: Any) -> Any:
        return json.loads(value) if value is not None else None

    def set_list_items_attribute(self, value: Any) -> None:
        self.store_raw('list_items', json.dumps(value))

    def get_password_attribute(self, value: Any) -> str:
        return '******'

    def set_password_attribute(self, value: str) -> None:
        self.store_raw('password_hash', hashlib.sha1(value.encode()).hexdigest())


class GetMutatorsStub(Model):

    def get_first_name_attribute(self, value: Any) -> None:
        pass

    def get_middle_name_attribute(self, value: Any) -> None:
        pass

    def get_last_name_attribute(self, value: Any) -> None:
        pass

    def do_not_get_first_invalid_attribute(self) -> None:
        pass

    def get_second_invalid_attribute_either(self) -> None:
        pass


class CastingStub(Model):
    casts: ClassVar[Dict[str, Any]] = {
        'intAttribute': 'int',
        'floatAttribute': 'float',
        'stringAttribute': 'string',
        'boolAttribute': 'bool',
        'booleanAttribute': 'boolean',
        'objectAttribute': 'object',
        'arrayAttribute': 'array',
        'jsonAttribute': 'json',
        'dateAttribute': 'date',
        'datetimeAttribute': 'datetime',
        'timestampAttribute': 'timestamp',
    }

    def json_attribute_value(self) -> Any:
        return self.get_raw_attributes()['jsonAttribute']


class VisibleStub(Model):
    visible: ClassVar[List[str]] = ['type']


class TransformStub(Model):
    casts: ClassVar[Dict[str, Any]] = {
        'contact': VisibleStub,
        'items': [Model],
    }


class Status(Enum):
    DRAFT = 'draft'
    PUBLISHED = 'published'


class GuardedStub(Model):
    guarded: ClassVar[List[str]] = ['role']


class Article(Model):
    fillable: ClassVar[List[str]] = ['title', 'status', 'published_at', 'author']
    casts: ClassVar[Dict[str, Any]] = {
        'status': Status,
        'published_at': 'datetime',
        'author': GuardedStub,
    }

    headline = Attribute.make(
        get=lambda model, value: (model.title or '').upper(),
    )

    def get_title_attribute(self, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class TotallyGuardedStub(Model):
    guarded: ClassVar[List[str]] = ['*']


class FillableStub(Model):
    fillable: ClassVar[List[str]] = ['name', 'age']
    casts: ClassVar[Dict[str, Any]] = {'age': 'int'}


class BlogPost(Resource):
    fillable: ClassVar[List[str]] = ['title', 'body']


class Comment(Resource):
    path: ClassVar[str] = 'posts/{post_id}/comments'
