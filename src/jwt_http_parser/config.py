"""Configuration for the token parser chain.

Settings are read from Flask-style mappings (``app.config``) or from the
environment, optionally seeded from a ``.env`` file via python-dotenv.

Recognised keys:
    JWT_PARSER_CHAIN   Parser names in priority order, as a sequence or a
                       comma-separated string. Names: header, query, input,
                       route, lumen_route.
    JWT_HEADER_NAME    Header carrying the token (default ``Authorization``).
    JWT_HEADER_PREFIX  Authentication scheme (default ``bearer``).
    JWT_QUERY_KEY      Query string parameter (default ``token``).
    JWT_INPUT_KEY      Request body field (default ``token``).
    JWT_ROUTE_KEY      Route parameter (default ``token``).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from dotenv import load_dotenv

from .parsers import AuthHeaders, InputSource, LumenRouteParams, QueryString, RouteParams

if TYPE_CHECKING:
    from .protocols import TokenParser

DEFAULT_CHAIN: Final[tuple[str, ...]] = ("header", "query", "input", "route")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Which parsers to chain, in what order, and how each is configured.

    Attributes:
        chain: Parser names in priority order.
        header_name: Header read by the ``header`` parser.
        header_prefix: Scheme expected by the ``header`` parser.
        query_key: Parameter read by the ``query`` parser.
        input_key: Field read by the ``input`` parser.
        route_key: Parameter read by the ``route`` and ``lumen_route`` parsers.
    """

    chain: tuple[str, ...] = DEFAULT_CHAIN
    header_name: str = "Authorization"
    header_prefix: str = "bearer"
    query_key: str = "token"
    input_key: str = "token"
    route_key: str = "token"

    def __post_init__(self) -> None:
        if not self.chain:
            raise ValueError("chain must name at least one parser")
        unknown = [name for name in self.chain if name not in _FACTORIES]
        if unknown:
            raise ValueError(
                f"Unknown parser name(s) {unknown!r}; expected any of {sorted(_FACTORIES)!r}"
            )
        for key, field in _SCALAR_KEYS.items():
            value = getattr(self, field)
            if not value or not value.strip():
                raise ValueError(f"{field} cannot be empty (set via {key})")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> ParserConfig:
        """Build a config from ``JWT_*`` keys; missing keys keep their defaults."""
        overrides: dict[str, Any] = {}

        chain = mapping.get("JWT_PARSER_CHAIN")
        if chain is not None:
            overrides["chain"] = _parse_chain(chain)

        for key, field in _SCALAR_KEYS.items():
            value = mapping.get(key)
            if value is not None:
                overrides[field] = str(value)

        return cls(**overrides)

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike[str] | None = None) -> ParserConfig:
        """Build a config from the process environment.

        Values from ``dotenv_path`` (or a ``.env`` file found by
        python-dotenv) are loaded first without overriding variables that
        are already set.
        """
        load_dotenv(dotenv_path)
        return cls.from_mapping(os.environ)

    def build_chain(self) -> list[TokenParser]:
        """Return new parser instances in configured order."""
        return [_FACTORIES[name](self) for name in self.chain]


def _parse_chain(value: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    return tuple(name.strip().lower() for name in value if name and name.strip())


_SCALAR_KEYS: Final[dict[str, str]] = {
    "JWT_HEADER_NAME": "header_name",
    "JWT_HEADER_PREFIX": "header_prefix",
    "JWT_QUERY_KEY": "query_key",
    "JWT_INPUT_KEY": "input_key",
    "JWT_ROUTE_KEY": "route_key",
}

_FACTORIES: Final[dict[str, Callable[[ParserConfig], TokenParser]]] = {
    "header": lambda c: AuthHeaders(c.header_name, c.header_prefix),
    "query": lambda c: QueryString(c.query_key),
    "input": lambda c: InputSource(c.input_key),
    "route": lambda c: RouteParams(c.route_key),
    "lumen_route": lambda c: LumenRouteParams(c.route_key),
}
