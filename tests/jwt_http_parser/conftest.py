from unittest.mock import Mock

import jwt
import pytest
from flask import Flask
from werkzeug.test import EnvironBuilder

from jwt_http_parser import FlaskRequest


@pytest.fixture()
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def make_jwt():
    """
    Factory fixture that returns a function minting compact HS256 tokens.

    Usage in tests:
        token = make_jwt(sub="u1")
    """

    def _make(*, sub: str = "u1", secret: str = "supersecret") -> str:
        return jwt.encode({"sub": sub}, secret, algorithm="HS256")

    return _make


@pytest.fixture
def make_request(app: Flask):
    """
    Factory fixture building a FlaskRequest outside of a request context.

    Keyword arguments are passed to werkzeug's EnvironBuilder
    (method, headers, query_string, environ_overrides, ...).
    """

    def _make(path: str = "/foo", *, route_resolver=None, **kwargs) -> FlaskRequest:
        environ = EnvironBuilder(path=path, **kwargs).get_environ()
        return FlaskRequest(app.request_class(environ), route_resolver=route_resolver)

    return _make


@pytest.fixture
def make_route():
    """
    Factory fixture for route stubs.

    The stub's parameter() returns ``value`` for ``name`` and None for any
    other parameter name.
    """

    def _make(value: str | None = None, name: str = "token") -> Mock:
        route = Mock(spec=["parameter"])
        route.parameter.side_effect = lambda key: value if key == name else None
        return route

    return _make
