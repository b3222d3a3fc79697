"""secure_route: URL routing with typed bracket placeholders."""

from secure_route.errors import (
    DuplicateRouteName,
    PatternError,
    RouterError,
    UnknownRoute,
)
from secure_route.router import Router
from secure_route.types import Match, Response, StatusCode

__version__ = "1.0.0"

__all__ = [
    "DuplicateRouteName",
    "Match",
    "PatternError",
    "Response",
    "Router",
    "RouterError",
    "StatusCode",
    "UnknownRoute",
]
