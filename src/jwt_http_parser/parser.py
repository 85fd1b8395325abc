"""Chain of token parsers.

``Parser`` holds a request and an ordered list of token parsers and asks
each of them, in order, for a token. The first parser that finds one wins;
parsers that find nothing simply abstain.

Example:
    ```python
    parser = Parser(FlaskRequest(), [AuthHeaders(), QueryString()])
    if parser.has_token():
        token = parser.parse_token()
    ```
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import MissingToken
from .parsers import AuthHeaders, InputSource, QueryString, RouteParams

if TYPE_CHECKING:
    from .protocols import Chain, HttpRequest, TokenParser

logger = logging.getLogger(__name__)


def default_chain() -> list[TokenParser]:
    """Return a new chain: Authorization header, query string, input, route."""
    return [AuthHeaders(), QueryString(), InputSource(), RouteParams()]


class Parser:
    """Locates a token in a request by trying each parser of a chain in turn.

    Both the request and the chain can be replaced at any time; results are
    never cached, so each call reflects the current state. Not thread-safe:
    create one instance per request.

    Attributes:
        _request: Request passed to every parser.
        _chain: Parsers in priority order, kept by reference.
    """

    def __init__(self, request: HttpRequest, chain: Chain | None = None) -> None:
        """Initialize the parser.

        Args:
            request: The request to search.
            chain: Parsers in priority order. Defaults to ``default_chain()``.
        """
        self._request = request
        self._chain: Chain = default_chain() if chain is None else chain

    def get_chain(self) -> Chain:
        return self._chain

    def set_chain(self, chain: Chain) -> Parser:
        """Replace the chain with ``chain`` (stored as given, not copied)."""
        self._chain = chain
        return self

    def set_chain_order(self, chain: Chain) -> Parser:
        """Alias of ``set_chain``."""
        return self.set_chain(chain)

    def get_request(self) -> HttpRequest:
        return self._request

    def set_request(self, request: HttpRequest) -> Parser:
        self._request = request
        return self

    def parse_token(self) -> str | None:
        """Run the chain and return the first token found.

        Returns:
            The token from the earliest parser that found one, or ``None``
            if the chain is empty or no parser found a token.
        """
        for parser in self._chain:
            token = parser.parse(self._request)
            if token:
                logger.debug("Token found by %r", parser)
                return token

        logger.debug("No token found by %d parser(s)", len(self._chain))
        return None

    def has_token(self) -> bool:
        return self.parse_token() is not None

    def require_token(self) -> str:
        """Like ``parse_token`` but fail when no token is found.

        Raises:
            MissingToken: If no parser in the chain found a token.
        """
        token = self.parse_token()
        if token is None:
            raise MissingToken()
        return token
