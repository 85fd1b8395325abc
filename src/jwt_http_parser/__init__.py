"""
Bearer token lookup for Flask requests.

High-level flow (per request)
-----------------------------
1. A ``Parser`` is built for the request with an ordered chain of token
   parsers (``AuthHeaders``, ``QueryString``, ``InputSource``,
   ``RouteParams`` by default).
2. ``Parser.parse_token()`` asks each parser in turn; the first token found
   wins and later parsers are not consulted.
3. Parsers that find nothing return ``None``; a request with no token at
   all yields ``None`` rather than an error.

Notes
-----
- Tokens are located, never verified. Verify signatures and claims before
  trusting a token.
- Chain order is priority order. Put ``AuthHeaders`` first unless you have
  a reason not to.
- ``LumenRouteParams`` only exists for route resolvers that return
  ``[matched, action, parameters]`` arrays.

Example usage
-------------

.. code-block:: python

    from flask import Flask, g

    from jwt_http_parser import TokenParserExtension

    app = Flask(__name__)
    app.config["JWT_PARSER_CHAIN"] = "header,query"
    tokens = TokenParserExtension(app)

    @app.get("/me")
    @tokens.require_token()
    def me():
        return {"token_length": len(g.jwt_token)}

Or without the extension:

.. code-block:: python

    from jwt_http_parser import AuthHeaders, FlaskRequest, Parser, QueryString

    parser = Parser(FlaskRequest(), [AuthHeaders(), QueryString()])
    token = parser.parse_token()
"""

# Config
from .config import ParserConfig

# Errors
from .errors import AuthError, MissingToken

# Flask extension
from .flask_extension import TokenParserExtension, get_token

# Request adapter
from .http import FlaskRequest, MatchedRoute

# Chain
from .parser import Parser, default_chain

# Parsers
from .parsers import (
    AuthHeaders,
    InputSource,
    KeyMixin,
    LumenRouteParams,
    QueryString,
    RouteParams,
)

# Protocols
from .protocols import Chain, HttpRequest, Route, RouteResolver, TokenParser, ViewFunc

__all__ = [
    # Errors
    "AuthError",
    "MissingToken",
    # Protocols
    "Chain",
    "HttpRequest",
    "Route",
    "RouteResolver",
    "TokenParser",
    "ViewFunc",
    # Request adapter
    "FlaskRequest",
    "MatchedRoute",
    # Parsers
    "AuthHeaders",
    "InputSource",
    "KeyMixin",
    "LumenRouteParams",
    "QueryString",
    "RouteParams",
    # Chain
    "Parser",
    "default_chain",
    # Config
    "ParserConfig",
    # Flask extension
    "TokenParserExtension",
    "get_token",
]
