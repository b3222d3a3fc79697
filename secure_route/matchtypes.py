"""Placeholder type registry.

Maps the short type tag of a placeholder (``i`` in ``[i:id]``) to the
regex fragment its named group is built from.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

from secure_route.errors import PatternError

# tag -> regex fragment; "" is the type of an untyped placeholder
DEFAULT_MATCH_TYPES: Dict[str, str] = {
    "i": r"[0-9]++",
    "a": r"[0-9A-Za-z]++",
    "h": r"[0-9A-Fa-f]++",
    "*": r"[^/]+",
    "**": r".+",
    "": r"[^/.]++",
}


@dataclass(frozen=True)
class TypeResolution:
    """Outcome of a registry lookup.

    ``registered`` is False when the tag was not found and is used as an
    inline regex fragment instead.
    """

    tag: str
    fragment: str
    registered: bool


class MatchTypes(Mapping[str, str]):
    """Registry of placeholder types."""

    def __init__(self, match_types: Optional[Mapping[str, str]] = None) -> None:
        """Initialize registry with the built-in types."""
        self._types: Dict[str, str] = dict(DEFAULT_MATCH_TYPES)
        if match_types:
            self.update(match_types)

    def __getitem__(self, tag: str) -> str:
        return self._types[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def update(self, match_types: Mapping[str, str]) -> None:
        """Merge caller types over the registry, later entries win."""
        for tag, fragment in match_types.items():
            try:
                re.compile(fragment)
            except re.error as err:
                raise PatternError(
                    f"Match type {tag!r} is not a valid regex ({err})", fragment
                ) from err
        self._types.update(match_types)

    def resolve(self, tag: str) -> TypeResolution:
        """Return the regex fragment for a type tag.

        Unknown tags resolve to themselves so that ``[\\d{4}:year]``
        works without registering a type first.
        """
        if tag in self._types:
            return TypeResolution(tag, self._types[tag], True)
        return TypeResolution(tag, tag, False)
