"""Ownership checks and positional list mutation shared by the aggregates.

Embedded lists (likes, comments, experience, education) are kept
most-recent-first. Entries are added at the head and removed by locating
their position with a linear scan.
"""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar
from uuid import UUID

from core.exceptions import AuthorizationError

T = TypeVar("T")


def find_index(items: Sequence[T], predicate: Callable[[T], bool]) -> int | None:
    """Return the position of the first item matching ``predicate``, or None."""
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return None


def index_of_id(items: Sequence[Any], entry_id: UUID | None) -> int | None:
    """Return the position of the entry whose ``id`` equals ``entry_id``."""
    return find_index(items, lambda item: item.id == entry_id)


def head_insert(items: list[T], item: T) -> None:
    """Place ``item`` at position 0."""
    items.insert(0, item)


def remove_at(items: list[T], index: int | None) -> T | None:
    """Remove and return the item at ``index``.

    A ``None`` index means the lookup found nothing; the list is left as is.
    """
    if index is None:
        return None
    return items.pop(index)


def remove_by_id(items: list[T], entry_id: UUID | None) -> T | None:
    """Remove the entry with ``entry_id`` if present, keeping the order of the rest."""
    return remove_at(items, index_of_id(items, entry_id))


def require_owner(owner_id: UUID, user_id: UUID, message: str = "User not authorized") -> None:
    """Raise AuthorizationError unless ``user_id`` is the recorded owner."""
    if owner_id != user_id:
        raise AuthorizationError(message)
