"""Regex patterns for route placeholder parsing."""

import re
from typing import List, Union

from secure_route.errors import PatternError
from secure_route.types import Placeholder

# Pattern matching expressions
global_flags_expr = re.compile(r"^(?:\(\?[aiLmsux]+\))+")
placeholder_expr = re.compile(r"(?P<prefix>[/.]?)\[(?P<inner>[^\]]*)\](?P<optional>\??)")
bracket_expr = re.compile(r"[\[\]]")

CATCH_ALL = "*"
REGEX_PREFIX = "@"


def has_placeholders(pattern: str) -> bool:
    """Return True if the pattern needs the compiler at all."""
    return "[" in pattern


def tokenize(pattern: str) -> List[Union[str, Placeholder]]:
    """Split a route pattern into literal strings and placeholders.

    Examples::

        "/users"               -> ["/users"]
        "/users/[i:id]"        -> ["/users", Placeholder("/[i:id]", "/", "i", "id", ...)]
        "/file.[:format]?"     -> ["/file", Placeholder(".[:format]?", ".", "", "format", ...)]

    Raises ``PatternError`` for unterminated or stray brackets and for
    parameter names that cannot become a named group.
    """
    tokens: List[Union[str, Placeholder]] = []
    position = 0
    for match in placeholder_expr.finditer(pattern):
        literal = pattern[position : match.start()]
        _check_literal(literal, pattern)
        if literal:
            tokens.append(literal)

        type_tag, sep, name = match.group("inner").partition(":")
        if not sep:
            # "[id]" is shorthand for "[:id]"
            type_tag, name = "", type_tag
        if not name.isidentifier():
            raise PatternError(f"Invalid parameter name {name!r}", pattern)

        tokens.append(
            Placeholder(
                block=match.group(0),
                prefix=match.group("prefix"),
                type_tag=type_tag,
                name=name,
                optional=bool(match.group("optional")),
                start=match.start(),
                end=match.end(),
            )
        )
        position = match.end()

    literal = pattern[position:]
    _check_literal(literal, pattern)
    if literal:
        tokens.append(literal)
    return tokens


def scan_placeholders(pattern: str) -> List[Placeholder]:
    """Return the placeholders of a pattern, left to right."""
    return [token for token in tokenize(pattern) if isinstance(token, Placeholder)]


def _check_literal(literal: str, pattern: str) -> None:
    bracket = bracket_expr.search(literal)
    if bracket is None:
        return
    if bracket.group() == "[":
        raise PatternError("Unterminated placeholder", pattern)
    raise PatternError("Unbalanced ']'", pattern)
