"""REST endpoint templates, keyed by operation.

Every template takes its parameters positionally; the API version always
comes first. Resolution is plain substitution: only the query and search
helpers below touch caller text.
"""

from __future__ import annotations

import string
from types import MappingProxyType
from typing import Iterable, Union
from urllib.parse import quote_plus

from .exceptions import RouteArityError, UnknownRouteError

API_ROUTES = MappingProxyType(
    {
        "versions": "/services/data",
        "limits": "/services/data/v{}/limits/",
        "resources": "/services/data/v{}/",
        "sobjects": "/services/data/v{}/sobjects/",
        "sobjects-meta": "/services/data/v{}/sobjects/{}/",
        "sobjects-describe": "/services/data/v{}/sobjects/{}/describe/",
        "sobjects-type": "/services/data/v{}/sobjects/{}/",
        "sobjects-record": "/services/data/v{}/sobjects/{}/{}",
        "sobjects-record-fields": "/services/data/v{}/sobjects/{}/{}?fields={}",
        "sobjects-record-by-extid": "/services/data/v{}/sobjects/{}/{}/{}",
        "query": "/services/data/v{}/query?q={}",
        "search": "/services/data/v{}/search?q={}",
    }
)


def arity(key: str) -> int:
    """Number of parameters the template for ``key`` expects."""
    try:
        template = API_ROUTES[key]
    except KeyError:
        raise UnknownRouteError(key) from None
    return sum(1 for _, name, _, _ in string.Formatter().parse(template) if name is not None)


def resolve(key: str, *args: object) -> str:
    """Fill the template for ``key`` with ``args`` (version first)."""
    expected = arity(key)
    if len(args) != expected:
        raise RouteArityError(key, expected, len(args))
    return API_ROUTES[key].format(*args)


def escape_soql(soql: str) -> str:
    """Replace spaces with '+' for the query string; nothing else is escaped."""
    return soql.replace(" ", "+")


def encode_sosl(sosl: str) -> str:
    """Form-encode a SOSL string (braces included) for the search endpoint."""
    return quote_plus(sosl)


def join_fields(fields: Union[str, Iterable[str]]) -> str:
    if isinstance(fields, str):
        return fields
    return ",".join(fields)
