"""Cache store protocol for vendor data."""

from typing import Protocol, TypeVar

T = TypeVar("T")


class CacheStore(Protocol[T]):
    """
    Interface for a whole-document key/value cache.

    Implementations never raise: an unreadable store loads as empty and a
    failed write is logged and dropped.
    """

    def load(self) -> dict[str, T]:
        """Return all live entries keyed by cache key."""
        ...

    def save(self, mapping: dict[str, T]) -> None:
        """Replace the stored document with ``mapping``."""
        ...
