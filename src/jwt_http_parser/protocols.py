"""Protocol definitions for the token parser chain.

This module defines structural interfaces using Protocol (PEP 544) for:
- The request capabilities a token parser reads from
- Matched routes
- Token parsers (the links of the chain)

Using protocols allows any object with the right methods to take part, so
tests can hand in stubs and applications can add their own parsers without
inheriting from anything in this package.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeAlias

# ============================================================================
# Type Aliases
# ============================================================================

RouteResolver: TypeAlias = Callable[[], Any]
"""Zero-argument callable returning the matched route for a request.

The result is passed through untouched: a ``Route``, ``None`` when nothing
matched, or the ``[matched, action, parameters]`` list some Lumen releases
produce.
"""

Chain: TypeAlias = Sequence["TokenParser"]
"""Ordered token parsers. Earlier entries take precedence."""

ViewFunc: TypeAlias = Callable[..., Any]
"""Type alias for Flask view functions (callable that takes any args and returns any)."""


# ============================================================================
# Request collaborators
# ============================================================================


class Route(Protocol):
    """A matched route that exposes its bound URL parameters."""

    def parameter(self, name: str) -> Any:
        """Return the value bound to ``name``, or ``None`` if absent."""
        ...


class HttpRequest(Protocol):
    """The request capabilities token parsers rely on.

    Every lookup returns ``None`` for a missing value and never raises.
    """

    def header(self, name: str) -> str | None:
        """Read an HTTP header (case-insensitive name)."""
        ...

    def server(self, name: str) -> Any:
        """Read a server variable, e.g. ``REDIRECT_HTTP_AUTHORIZATION``."""
        ...

    def query(self, name: str) -> Any:
        """Read a query string parameter."""
        ...

    def input(self, name: str) -> Any:
        """Read a request input value (form or JSON body, then query)."""
        ...

    def route(self) -> Any:
        """Resolve the matched route. See ``RouteResolver`` for the shapes."""
        ...


# ============================================================================
# Core Protocols
# ============================================================================


class TokenParser(Protocol):
    """Protocol for a single token extraction technique.

    Implementers must provide a parse() method that inspects the request
    and returns the raw token string, or ``None`` when the request does not
    carry a token in the place this parser looks.

    Common implementations:
    - Authorization: Bearer <token> header
    - Query string parameter
    - Route parameter
    """

    def parse(self, request: HttpRequest) -> str | None:
        """Extract the raw token from ``request``.

        Returns:
            Non-empty token string, or ``None``.

        Note:
            Absence is not an error. Implementations must not raise for a
            well-formed request that simply lacks the token, and must not
            modify the request.
        """
        ...
