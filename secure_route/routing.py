"""Route entries, pattern compilation and URL generation."""

import re
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from secure_route.errors import PatternError
from secure_route.matchtypes import MatchTypes
from secure_route.patterns import (
    CATCH_ALL,
    REGEX_PREFIX,
    global_flags_expr,
    has_placeholders,
    scan_placeholders,
    tokenize,
)
from secure_route.types import Placeholder


def _compile_token(token: Union[str, Placeholder], match_types: MatchTypes) -> str:
    if isinstance(token, str):
        return re.escape(token)

    fragment = match_types.resolve(token.type_tag).fragment
    group = f"(?:{re.escape(token.prefix)}(?P<{token.name}>{fragment}))"
    if token.optional:
        group += "?"
    return group


def _path_to_regex(pattern: str, match_types: MatchTypes) -> str:
    flags = ""
    if pattern.startswith(REGEX_PREFIX):
        body = pattern[len(REGEX_PREFIX) :]
        # global inline flags must lead the whole expression
        leading = global_flags_expr.match(body)
        if leading:
            flags, body = leading.group(), body[leading.end() :]
    else:
        body = "".join(_compile_token(token, match_types) for token in tokenize(pattern))
    return rf"{flags}^(?:{body})\Z"


def compile_route(pattern: str, match_types: MatchTypes) -> re.Pattern[str]:
    """Compile a route pattern into an anchored expression.

    ``/users/[i:id]`` becomes ``^(?:/users(?:/(?P<id>[0-9]++)))\\Z``.
    A pattern starting with ``@`` is taken as a raw regex body.
    """
    try:
        return re.compile(_path_to_regex(pattern, match_types))
    except re.error as err:
        raise PatternError(f"Route does not compile ({err})", pattern) from err


def generate_path(
    pattern: str, params: Optional[Mapping[str, Any]] = None, base_path: str = ""
) -> str:
    """Fill the placeholders of a raw pattern with parameter values.

    Missing optional placeholders are dropped together with their
    prefix. Missing required ones are not an error and, unlike optional
    ones, keep their prefix (``/users/``) so the gap stays visible.
    Values are inserted as ``str(value)`` without any encoding.
    """
    params = params or {}
    if pattern.startswith(REGEX_PREFIX):
        return base_path + pattern

    parts = [base_path]
    for token in tokenize(pattern):
        if isinstance(token, str):
            parts.append(token)
            continue

        value = params.get(token.name)
        if value is not None:
            parts.append(f"{token.prefix}{value}")
        elif not token.optional:
            parts.append(token.prefix)

    return "".join(parts)


def _methods_to_spec(methods: Union[str, Sequence[str]]) -> str:
    if isinstance(methods, str):
        return methods
    return "|".join(methods)


class RouteEntry:
    """A registered route."""

    def __init__(
        self,
        methods: Union[str, Sequence[str]],
        pattern: str,
        handler: Callable,
        name: Optional[str] = None,
    ) -> None:
        """Initialize route object."""
        self.methods = _methods_to_spec(methods)
        self.pattern = pattern
        self.handler = handler
        self.name = name
        if not self.methods:
            raise PatternError("Route has no methods", pattern)
        try:
            self.methods_regex = re.compile(rf"^(?:{self.methods})\Z", re.IGNORECASE)
        except re.error as err:
            raise PatternError(f"Invalid method spec {self.methods!r}", pattern) from err

        self.placeholders: List[Placeholder] = []
        self.literal_prefix = pattern
        self.bracket_pos = -1
        if self.is_parametrized:
            self.placeholders = scan_placeholders(pattern)
            self.literal_prefix = pattern[: self.placeholders[0].start]
            self.bracket_pos = pattern.index("[")

    def __eq__(self, other) -> bool:
        """Check for equality."""
        if not isinstance(other, RouteEntry):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        return f"RouteEntry({self.methods!r}, {self.pattern!r}, name={self.name!r})"

    @property
    def is_catch_all(self) -> bool:
        return self.pattern == CATCH_ALL

    @property
    def is_regex(self) -> bool:
        return self.pattern.startswith(REGEX_PREFIX)

    @property
    def is_parametrized(self) -> bool:
        """True for patterns that go through the placeholder compiler."""
        return not self.is_regex and has_placeholders(self.pattern)

    def accepts_method(self, method: str) -> bool:
        """Check the request method against the method alternation."""
        return self.methods_regex.match(method) is not None

    def prefilter(self, path: str) -> bool:
        """Cheap check run before the compiled expression.

        False only if the path cannot match: it does not start with the
        literal text in front of the first placeholder, it does not end
        with ``/`` and the first ``[`` does not follow a ``/``.
        """
        if path.startswith(self.literal_prefix):
            return True
        if path.endswith("/"):
            return True
        return self.bracket_pos > 0 and self.pattern[self.bracket_pos - 1] == "/"
