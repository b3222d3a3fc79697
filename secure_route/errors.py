"""Router exceptions."""

from typing import Optional


class RouterError(Exception):
    """Base for all secure_route errors."""


class DuplicateRouteName(RouterError, ValueError):
    """A route name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot redeclare route '{name}'")


class UnknownRoute(RouterError, KeyError):
    """URL generation was asked for a route name that does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Route '{name}' does not exist.")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class PatternError(RouterError, ValueError):
    """Malformed route pattern or match type fragment.

    Raised at registration time so a broken route table fails loudly
    instead of silently never matching.
    """

    def __init__(self, message: str, pattern: Optional[str] = None) -> None:
        self.pattern = pattern
        if pattern is not None:
            message = f"{message}: {pattern!r}"
        super().__init__(message)
