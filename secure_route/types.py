from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


class StatusCode(Enum):
    """HTTP status codes produced by the dispatch layer."""

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500

    @property
    def status_line(self) -> str:
        """Return the WSGI status line, e.g. ``404 Not Found``."""
        return f"{self.value} {HTTPStatus(self.value).phrase}"


@dataclass(frozen=True)
class Response:
    status_code: StatusCode
    content_type: str
    body: Union[str, bytes]
    headers: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class Placeholder:
    """One ``[type:name]`` token scanned out of a route pattern.

    ``block`` is the full matched text, literal prefix included, and
    ``start``/``end`` are its offsets in the pattern.
    """

    block: str
    prefix: str
    type_tag: str
    name: str
    optional: bool
    start: int
    end: int


@dataclass(frozen=True)
class Match:
    """Result of a successful route match.

    ``arguments`` holds the captured ``(name, value)`` pairs in the order
    the placeholders were declared; ``params`` is the same data as a dict.
    """

    handler: Callable[..., Any]
    params: Dict[str, str]
    name: Optional[str] = None
    arguments: List[Tuple[str, str]] = field(default_factory=list)
    route: Any = None
