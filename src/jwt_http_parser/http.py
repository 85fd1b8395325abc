"""Flask request adapter for the token parser chain.

``FlaskRequest`` wraps a werkzeug request and exposes the small capability
set described by ``protocols.HttpRequest``. Route resolution is pluggable:
by default the route is built from the URL rule Flask matched for the
request, but any zero-argument callable can be installed instead (this is
how applications mounted behind other routers, and the tests, supply
routes).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from flask import request as current_request

if TYPE_CHECKING:
    from flask import Request
    from werkzeug.routing import Rule

    from .protocols import RouteResolver


class MatchedRoute:
    """The URL rule matched for a request together with its bound values.

    Attributes:
        rule: The werkzeug ``Rule`` that matched, if known.
    """

    def __init__(self, rule: Rule | None, view_args: Mapping[str, Any] | None) -> None:
        self.rule = rule
        self._view_args: dict[str, Any] = dict(view_args or {})

    def parameter(self, name: str, default: Any = None) -> Any:
        return self._view_args.get(name, default)

    def parameters(self) -> dict[str, Any]:
        return dict(self._view_args)

    def __repr__(self) -> str:
        rule = self.rule.rule if self.rule is not None else None
        return f"MatchedRoute(rule={rule!r}, parameters={sorted(self._view_args)!r})"


class FlaskRequest:
    """Adapts a Flask request to the ``HttpRequest`` protocol.

    Example:
        ```python
        @app.get("/items/<token>")
        def item(token):
            parser = Parser(FlaskRequest())
            return {"token": parser.parse_token()}
        ```

    Attributes:
        _request: The wrapped werkzeug request.
        _route_resolver: Callable producing the matched route, or ``None``
            to use the URL rule Flask matched.
    """

    def __init__(
        self,
        request: Request | None = None,
        route_resolver: RouteResolver | None = None,
    ) -> None:
        """Wrap ``request``.

        Args:
            request: Request to wrap. Defaults to the request of the active
                Flask request context.
            route_resolver: Optional override for ``route()``.

        Raises:
            RuntimeError: If no request is given and no request context is
                active.
        """
        if request is None:
            request = current_request._get_current_object()  # type: ignore[attr-defined]
        self._request: Request = request
        self._route_resolver: RouteResolver | None = route_resolver

    @property
    def request(self) -> Request:
        return self._request

    def set_route_resolver(self, resolver: RouteResolver | None) -> FlaskRequest:
        self._route_resolver = resolver
        return self

    def header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def server(self, name: str) -> Any:
        return self._request.environ.get(name)

    def query(self, name: str) -> Any:
        return self._request.args.get(name)

    def input(self, name: str) -> Any:
        """Read ``name`` from the form body, the JSON body, then the query."""
        if name in self._request.form:
            return self._request.form.get(name)

        body = self._request.get_json(silent=True)
        if isinstance(body, Mapping) and name in body:
            return body[name]

        return self.query(name)

    def route(self) -> Any:
        if self._route_resolver is not None:
            return self._route_resolver()

        rule = self._request.url_rule
        if rule is None:
            # Routing failed or has not run yet
            return None
        return MatchedRoute(rule, self._request.view_args)
