"""Flask extension for locating bearer tokens.

This module is the integration point between the token parser chain and
Flask applications. It builds a ``Parser`` for the current request from the
app's configuration and offers a decorator that rejects requests carrying
no token.

Key Components:
- TokenParserExtension: Per-app configuration and ``require_token`` decorator
- get_token: Token of the current request, or ``None``

Scope:
    The token is located, not verified. Pass it to a verifier before
    trusting anything it claims.
"""

from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING, Any, Final

from flask import Flask, abort, current_app, g, has_app_context

from .config import ParserConfig
from .errors import AuthError
from .http import FlaskRequest
from .parser import Parser

if TYPE_CHECKING:
    from .protocols import RouteResolver, ViewFunc

_EXT_KEY: Final[str] = "jwt_http_parser"
"""Flask extensions registry key for TokenParserExtension."""

_CONFIG_KEY: Final[str] = "jwt_http_parser.config"
"""Flask extensions registry key for the ParserConfig resolved for that app."""


class TokenParserExtension:
    """
    Flask glue for the token parser chain.

    Responsibilities:
    - Hold the parser configuration (from ``app.config`` or explicit)
    - Build a ``Parser`` for the current request
    - Store the located token in ``flask.g.jwt_token``
    - Convert a missing token into an HTTP 401 response (abort)

    Pattern:
        tokens = TokenParserExtension()
        tokens.init_app(app)

    Usage:
        @app.get("/me")
        @tokens.require_token()
        def me(): ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        config: ParserConfig | None = None,
        route_resolver: RouteResolver | None = None,
    ) -> None:
        self._config: ParserConfig | None = config
        self._route_resolver: RouteResolver | None = route_resolver
        if app is not None:
            self.init_app(app)

    def init_app(
        self,
        app: Flask,
        *,
        config: ParserConfig | None = None,
        route_resolver: RouteResolver | None = None,
    ) -> None:
        """Initialize the Flask app with the TokenParserExtension.

        Args:
            app (Flask): The Flask application instance.
            config (ParserConfig | None, optional): Parser configuration.
                Defaults to the one given at construction, or else one read
                from ``app.config``. Stored per app.
            route_resolver (RouteResolver | None, optional): Override for
                route resolution. Defaults to Flask's matched URL rule.
        """
        if config is None:
            config = self._config
        if config is None:
            config = ParserConfig.from_mapping(app.config)
        if route_resolver is not None:
            self._route_resolver = route_resolver

        app.extensions[_CONFIG_KEY] = config
        app.extensions[_EXT_KEY] = self

    @property
    def config(self) -> ParserConfig:
        """Config of the current app, else the one given at construction."""
        if has_app_context():
            config = current_app.extensions.get(_CONFIG_KEY)
            if config is not None:
                return config
        if self._config is None:
            return ParserConfig()
        return self._config

    def parser(self) -> Parser:
        """Return a new ``Parser`` for the current request.

        Raises:
            RuntimeError: Outside of a Flask request context.
        """
        request = FlaskRequest(route_resolver=self._route_resolver)
        return Parser(request, self.config.build_chain())

    def require_token(self):
        """Decorator rejecting requests that carry no token.

        Behavior:
        - Run the configured parser chain against the current request
        - On success: store the raw token in ``flask.g.jwt_token`` and call
          the view
        - On failure: ``abort(401)``

        Returns:
        Callable[[ViewFunc], ViewFunc]:
                        A decorator that wraps a Flask view function.
        Side Effects:
                - Writes the token to ``flask.g.jwt_token`` before calling the view.
                - May terminate request handling early via ``flask.abort``.
        """

        def decorator(view: ViewFunc) -> ViewFunc:
            @wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    g.jwt_token = self.parser().require_token()
                except AuthError as e:
                    abort(e.error_code, description=e.description)

                return view(*args, **kwargs)

            return wrapper

        return decorator


def get_token() -> str | None:
    """
    Return the token of the current Flask request, or ``None``.

    Uses the extension registered on the current app, or the default chain
    when none is registered.
    """
    ext = current_app.extensions.get(_EXT_KEY)
    if ext is None:
        return Parser(FlaskRequest()).parse_token()
    return ext.parser().parse_token()
