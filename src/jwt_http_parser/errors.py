"""Token lookup errors.

Token parsers never raise: a request without a token is an ordinary outcome
and is reported as ``None``. These exceptions exist for the callers that
need a token to continue (``Parser.require_token`` and the Flask extension).

Security Note:
    Messages are intentionally generic. They say that no token was found,
    never which sources were inspected or what they contained.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base exception for token lookup failures.

    Attributes:
        error_code: HTTP status code the Flask extension responds with.
        description: Client-facing message passed to ``flask.abort``.
    """

    error_code: int = 401
    description: str = "Authentication failed"

    def __init__(self, description: str | None = None) -> None:
        if description is not None:
            self.description = description
        super().__init__(self.description)


class MissingToken(AuthError):  # noqa: N818
    """Raised when no parser in the chain found a token in the request.

    This occurs when:
    - No Authorization header (or alternate server variable) carries a
      bearer token
    - The query string and request body lack the configured key
    - No route was matched, or the matched route has no such parameter

    This should typically result in an HTTP 401 Unauthorized response.
    """

    description = "Missing token"
