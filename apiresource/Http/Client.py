from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Optional, Type

import httpx

from apiresource.Http.Schemas import ClientOptions

logger = logging.getLogger(__name__)


class Client:
    """
    Shared HTTP transport of every resource.

    One ``httpx.Client`` is kept at class level and created on first use:

        Client.create(base_url='https://api.example.com/v1', token='...')
        response = Client.request('get', 'users', {'page': 2})
    """

    _transport: ClassVar[Optional[httpx.Client]] = None
    _options: ClassVar[Dict[str, Any]] = {}

    @classmethod
    def create(cls, **options: Any) -> Type['Client']:
        """Build the shared HTTP client, merging the given options into the previous ones."""
        merged = ClientOptions(**{**cls._options, **options})
        cls._options = {**cls._options, **options}

        cls.close()
        cls._transport = httpx.Client(
            base_url=merged.base_url,
            headers=merged.client_headers(),
            timeout=merged.timeout,
            transport=merged.transport,
        )
        logger.debug(f"Created HTTP client for {merged.base_url or '<no base url>'}")
        return cls

    @classmethod
    def transport(cls) -> httpx.Client:
        """Get the shared HTTP client, creating it with the default options if needed."""
        if cls._transport is None:
            cls.create()
        assert cls._transport is not None
        return cls._transport

    @classmethod
    def close(cls) -> None:
        """Close the shared HTTP client."""
        if cls._transport is not None:
            cls._transport.close()
            cls._transport = None

    @classmethod
    def reset(cls) -> None:
        """Close the client and forget every option."""
        cls.close()
        cls._options = {}

    @classmethod
    def request(cls, method: str, path: str, params: Any = None) -> httpx.Response:
        """
        Send a request to the API.

        GET parameters are sent as the query string, any other method sends
        them as a JSON body.

        @raise httpx.HTTPStatusError: on a 4xx/5xx response
        """
        method = method.upper()
        options = cls._resolve_parameters(method, params)

        logger.debug(f"{method} {path}")
        response = cls.transport().request(method, path, **options)
        response.raise_for_status()
        return response

    @classmethod
    def to_json(cls, method: str, path: str, params: Any = None) -> Any:
        """Send a request and decode its JSON body."""
        response = cls.request(method, path, params)
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _resolve_parameters(method: str, params: Any) -> Dict[str, Any]:
        if params is None:
            return {}
        if hasattr(params, 'to_dict') and not isinstance(params, Mapping):
            params = params.to_dict()
        else:
            params = dict(params)

        if not params:
            return {}
        return {'params' if method == 'GET' else 'json': params}
