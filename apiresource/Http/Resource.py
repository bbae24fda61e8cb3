from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, List, Optional, Pattern, Type, TypeVar, Union

import httpx

from apiresource.Exceptions import MissingValue
from apiresource.Http.Client import Client
from apiresource.Resource.Collection import Collection
from apiresource.Resource.Filter import Filter
from apiresource.Resource.Model import Model
from apiresource.Support.Registry import registry
from apiresource.Support.Str import Str

ResourceT = TypeVar('ResourceT', bound='Resource')

logger = logging.getLogger(__name__)

PLACEHOLDER: Pattern[str] = re.compile(r'\{(?P<name>\w+)\}')


class Resource(Model):
    """
    Model bound to a REST endpoint.

    The endpoint defaults to the plural kebab-case class name (``BlogPost`` is
    served from ``blog-posts``) and may be a template:

        class Comment(Resource):
            path = 'posts/{post_id}/comments'

        Comment.all({'sort': 'date'}, post_id=7)
        Comment.create({'body': 'Hello'}, post_id=7)
    """

    PATHS_BUCKET = 'paths'

    path: ClassVar[Optional[str]] = None

    # Model class filling the query string of GET requests
    filter_with: ClassVar[Type[Filter]] = Filter

    def __init__(self, attributes: Union[Mapping[str, Any], int, str, None] = None) -> None:
        if attributes is None or isinstance(attributes, Mapping):
            super().__init__(attributes)
            return

        # A scalar is the primary key of an existing resource
        super().__init__()
        self.set_key(attributes)

    # Paths
    @classmethod
    def resolve_path(cls, **bindings: Any) -> str:
        """
        Resolve the endpoint path of the resource.

        @raise MissingValue: when a placeholder of the path has no binding
        """
        template: str = registry.remember(cls.PATHS_BUCKET, cls, cls._default_path)

        def substitute(match: re.Match[str]) -> str:
            name = match.group('name')
            if bindings.get(name) is None:
                raise MissingValue(name, template)
            return str(bindings[name])

        return PLACEHOLDER.sub(substitute, template)

    @classmethod
    def _default_path(cls) -> str:
        if cls.path:
            return cls.path.strip('/')
        return Str.plural(Str.kebab(cls.__name__))

    # Events
    @classmethod
    def listen(cls, event: str, callback: Callable[..., Any]) -> None:
        """
        Register a listener on this class.

        ``requesting`` receives the method and the parameters before the
        request is sent; an upper-case method name (``GET``, ``POST``...)
        receives the response.
        """
        if '_listeners' not in cls.__dict__:
            cls._listeners = {}
        key = event if event == 'requesting' else event.upper()
        cls._listeners.setdefault(key, []).append(callback)

    @classmethod
    def get_listeners(cls, event: str) -> List[Callable[..., Any]]:
        listeners: Dict[str, List[Callable[..., Any]]] = cls.__dict__.get('_listeners', {})
        return list(listeners.get(event, []))

    @classmethod
    def flush_listeners(cls) -> None:
        """Remove every listener registered on this class."""
        cls.__dict__.get('_listeners', {}).clear()

    @classmethod
    def fire_resource_event(cls, event: str, *payload: Any) -> None:
        for listener in cls.get_listeners(event):
            listener(*payload)

    # Requests
    @classmethod
    def filters(cls, params: Any) -> Filter:
        """Fill the query string model of the resource."""
        if isinstance(params, Filter):
            return params
        return cls.filter_with(dict(params or {}))

    @classmethod
    def request(cls, method: str, id: Any = None, params: Any = None, **bindings: Any) -> httpx.Response:
        """Send a request to the resource endpoint, or to one resource when an id is given."""
        method = method.upper()

        if method == 'GET':
            params = cls.filters(params)

        path = cls.resolve_path(**bindings)
        if id is not None:
            path = f"{path}/{id}"

        cls.fire_resource_event('requesting', method, params)
        response = Client.request(method, path, params)
        cls.fire_resource_event(method, response)

        return response

    @classmethod
    def request_to_dict(cls, method: str, id: Any = None, params: Any = None, **bindings: Any) -> Any:
        """Send a request and decode its JSON body."""
        response = cls.request(method, id, params, **bindings)
        if not response.content:
            return {}
        return response.json()

    @classmethod
    def instance_from_request(
        cls: Type[ResourceT], method: str, id: Any = None, params: Any = None, **bindings: Any
    ) -> Union[ResourceT, Collection]:
        """Hydrate the response body: an object is one resource, an array a collection."""
        data = cls.request_to_dict(method, id, params, **bindings)

        if isinstance(data, list):
            return Collection.make_of(cls, data)
        return cls.new_trusted(data or {})

    @classmethod
    def all(cls, params: Any = None, **bindings: Any) -> Any:
        """Get the resources matching the given query parameters."""
        return cls.instance_from_request('GET', None, params, **bindings)

    @classmethod
    def find(cls: Type[ResourceT], id: Any, **bindings: Any) -> ResourceT:
        """Get a single resource by its primary key."""
        return cls.instance_from_request('GET', id, None, **bindings)  # type: ignore[return-value]

    @classmethod
    def create(cls: Type[ResourceT], attributes: Optional[Mapping[str, Any]] = None, **bindings: Any) -> ResourceT:
        """Fill a new resource and store it."""
        return cls(attributes).save(**bindings)

    def save(self: ResourceT, **bindings: Any) -> ResourceT:
        """Store the resource, then refresh it from the response."""
        key = self.get_key()
        method = 'POST' if key is None else 'PUT'

        data = type(self).request_to_dict(method, key, self, **bindings)
        if isinstance(data, Mapping) and data:
            self.set_raw_attributes(data)

        logger.debug(f"Saved {type(self).__name__} {self.get_key()!r} with {method}")
        return self

    def delete(self, **bindings: Any) -> bool:
        """Delete the resource."""
        key = self.get_key()
        if key is None:
            return False

        type(self).request('DELETE', key, None, **bindings)
        return True
