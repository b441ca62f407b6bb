"""
Case-insensitive identifier directory.

Every entity collection in the hotel is keyed by user-typed identifiers,
which must be unique regardless of case while keeping their original
spelling for display.
"""

from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")


def normalize_id(identifier: str) -> str:
    """Key under which an identifier is stored."""
    return identifier.lower()


class IdentifierDirectory(Generic[V]):
    """
    Insertion-ordered mapping from case-folded identifiers to values.

    The original identifier is kept next to each value so listings can
    show it as typed.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, V]] = {}

    def put(self, identifier: str, value: V) -> None:
        self._entries[normalize_id(identifier)] = (identifier, value)

    def get(self, identifier: str) -> Optional[V]:
        entry = self._entries.get(normalize_id(identifier))
        return entry[1] if entry is not None else None

    def remove(self, identifier: str) -> Optional[V]:
        """Remove and return the value, or None if it was not present."""
        entry = self._entries.pop(normalize_id(identifier), None)
        return entry[1] if entry is not None else None

    def ids(self) -> List[str]:
        """Identifiers in their original casing, in insertion order."""
        return [original for original, _ in self._entries.values()]

    def values(self) -> List[V]:
        return [value for _, value in self._entries.values()]

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and normalize_id(identifier) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[V]:
        return iter(self.values())

    def __repr__(self) -> str:
        return f"IdentifierDirectory({self.ids()!r})"
