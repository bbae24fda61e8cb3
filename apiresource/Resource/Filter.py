from __future__ import annotations

from typing import ClassVar, List

from apiresource.Resource.Model import Model


class Filter(Model):
    """
    Query string parameters of a GET request.

    Every filled attribute is sent; subclasses declare casts to normalize
    values (dates, booleans) before they reach the query string.
    """

    visible: ClassVar[List[str]] = ['*']
