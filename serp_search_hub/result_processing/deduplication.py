"""Duplicate removal keyed on exact result URLs."""

from collections.abc import Iterable, Iterator
from typing import Generic, Protocol, TypeVar


class HasUrl(Protocol):
    """Anything identified by a ``url`` attribute."""

    @property
    def url(self) -> str: ...


T = TypeVar("T", bound=HasUrl)


class UrlKeyedSet(Generic[T]):
    """Collection of items unique by URL.

    Registering an item whose URL is already present replaces the stored item
    (last write wins), but the URL keeps the position of its first
    registration. Iteration is therefore in first-seen URL order.

    URLs are compared as exact, case-sensitive strings.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._items: dict[str, T] = {}
        for item in items:
            self.add(item)

    def add(self, item: T) -> bool:
        """Register an item. Returns True when it replaced an existing entry."""
        replaced = item.url in self._items
        self._items[item.url] = item
        return replaced

    def get(self, url: str) -> T | None:
        return self._items.get(url)

    def __contains__(self, url: object) -> bool:
        return url in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def to_tuple(self) -> tuple[T, ...]:
        return tuple(self._items.values())


class OrderedUniqueList:
    """Append-only list of strings that keeps the first occurrence of each."""

    def __init__(self, values: Iterable[str] = ()):
        self._values: list[str] = []
        self._seen: set[str] = set()
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Append a value if unseen. Returns True when it was appended."""
        if value in self._seen:
            return False
        self._seen.add(value)
        self._values.append(value)
        return True

    def __contains__(self, value: object) -> bool:
        return value in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def to_tuple(self) -> tuple[str, ...]:
        return tuple(self._values)
