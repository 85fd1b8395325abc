"""Token parsing strategies for HTTP requests.

This module provides implementations of the TokenParser protocol, each of
which looks for a token in one part of an HTTP request. ``Parser`` chains
them together; see ``parser.py``.

Implementations:
- AuthHeaders: Authorization: Bearer <token> header, with the server
  variables some proxies move it to (recommended)
- QueryString: ``?token=<token>``
- InputSource: form or JSON request body
- RouteParams: a parameter of the matched route, e.g. ``/reset/<token>``
- LumenRouteParams: RouteParams that also understands Lumen route arrays

Security Considerations:
- Bearer headers are standard for APIs and should be tried first
- Tokens in query strings end up in access logs and browser history; only
  enable QueryString where a header cannot be sent (e.g. download links)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, Self

if TYPE_CHECKING:
    from .protocols import HttpRequest

logger = logging.getLogger(__name__)

_DEFAULT_KEY: Final[str] = "token"
"""Default parameter name for query, input and route lookups."""

_ALT_AUTH_HEADERS: Final[tuple[str, ...]] = (
    "HTTP_AUTHORIZATION",
    "REDIRECT_HTTP_AUTHORIZATION",
)
"""Server variables checked, in order, when the header itself is absent.

Apache with mod_rewrite (and some CGI setups) only exposes the header under
the ``REDIRECT_`` name.
"""


def _as_token(value: Any) -> str | None:
    """Normalise a looked-up value; empty and non-scalar values are not tokens."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class KeyMixin:
    """Configurable parameter name shared by the key-based parsers.

    Attributes:
        _key: Name of the parameter holding the token.
    """

    def __init__(self, key: str = _DEFAULT_KEY) -> None:
        self.set_key(key)

    def set_key(self, key: str) -> Self:
        """Set the parameter name and return ``self`` for chaining.

        Raises:
            ValueError: If key is empty.
        """
        if not key or not key.strip():
            raise ValueError("key cannot be empty")
        self._key = key
        return self

    def get_key(self) -> str:
        return self._key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r})"


class AuthHeaders:
    """Extracts the token from the Authorization header using the Bearer scheme.

    Expected format:
        Authorization: Bearer <token>

    When the header is missing, the server variables ``HTTP_AUTHORIZATION``
    and ``REDIRECT_HTTP_AUTHORIZATION`` are tried in that order.

    Attributes:
        _header: Name of the header to read.
        _prefix: Authentication scheme, compared case-insensitively.
    """

    def __init__(self, header: str = "Authorization", prefix: str = "bearer") -> None:
        self.set_header_name(header)
        self.set_header_prefix(prefix)

    def set_header_name(self, header: str) -> AuthHeaders:
        if not header or not header.strip():
            raise ValueError("header name cannot be empty")
        self._header = header
        return self

    def set_header_prefix(self, prefix: str) -> AuthHeaders:
        if not prefix or not prefix.strip():
            raise ValueError("header prefix cannot be empty")
        self._prefix = prefix.strip()
        return self

    def _from_alt_headers(self, request: HttpRequest) -> str | None:
        for name in _ALT_AUTH_HEADERS:
            value = request.server(name)
            if value:
                return value
        return None

    def parse(self, request: HttpRequest) -> str | None:
        """Extract the token from the Authorization header.

        Returns:
            Raw token (without the scheme prefix), or ``None`` if no header
            is present or it uses another scheme.
        """
        header = request.header(self._header) or self._from_alt_headers(request)
        if not header or not isinstance(header, str):
            return None

        # Split only once; the remainder must be the token alone
        parts = header.strip().split(None, 1)
        if len(parts) != 2:
            return None

        scheme, token = parts
        if scheme.lower() != self._prefix.lower():
            logger.debug("Ignoring %s header with scheme %r", self._header, scheme)
            return None

        # A bearer token is a single run of non-whitespace characters
        if len(token.split()) != 1:
            return None

        return _as_token(token)

    def __repr__(self) -> str:
        return f"AuthHeaders(header={self._header!r}, prefix={self._prefix!r})"


class QueryString(KeyMixin):
    """Extracts the token from a query string parameter (default ``token``)."""

    def parse(self, request: HttpRequest) -> str | None:
        return _as_token(request.query(self._key))


class InputSource(KeyMixin):
    """Extracts the token from the request input (form or JSON body)."""

    def parse(self, request: HttpRequest) -> str | None:
        return _as_token(request.input(self._key))


class RouteParams(KeyMixin):
    """Extracts the token from a parameter of the matched route.

    Requests without a matched route, or whose route resolver returns
    something that is not a route object, yield ``None``.
    """

    def parse(self, request: HttpRequest) -> str | None:
        return self._from_route(request.route())

    def _from_route(self, route: Any) -> str | None:
        lookup = getattr(route, "parameter", None)
        if not callable(lookup):
            return None

        return _as_token(lookup(self._key))


class LumenRouteParams(RouteParams):
    """RouteParams that also accepts Lumen's route arrays.

    Some Lumen releases resolve the route as a ``[matched, action,
    parameters]`` list instead of a route object. Only that three-element
    shape is understood; route objects are handled as in RouteParams.

    Warning:
        Only use this parser for applications that actually produce such
        arrays. Any other list or tuple is ignored.
    """

    def _from_route(self, route: Any) -> str | None:
        if isinstance(route, (list, tuple)):
            if len(route) != 3 or not isinstance(route[2], Mapping):
                logger.debug("Ignoring malformed Lumen route array of length %d", len(route))
                return None
            return _as_token(route[2].get(self._key))

        return super()._from_route(route)
