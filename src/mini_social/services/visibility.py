"""Privacy rules applied to every read of posts and stories."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Final, Protocol, TypeVar

PUBLIC: Final[str] = "public"
PRIVATE: Final[str] = "private"


class OwnedItem(Protocol):
    """Anything carrying an author id and a privacy flag."""

    user_id: int
    privacy: str | None


ItemT = TypeVar("ItemT", bound=OwnedItem)


def normalize_privacy(privacy: str | None) -> str:
    """Map a stored privacy flag to its effective value (NULL reads as public)."""
    return PRIVATE if privacy == PRIVATE else PUBLIC


def is_visible(item: OwnedItem, viewer_id: int | None) -> bool:
    """Return True if ``viewer_id`` may see ``item``.

    Public items (including those with no privacy flag) are visible to every
    viewer, anonymous ones included. Private items are visible to their
    author only.
    """
    if normalize_privacy(item.privacy) == PUBLIC:
        return True
    return viewer_id is not None and viewer_id == item.user_id


def filter_visible(items: Iterable[ItemT], viewer_id: int | None) -> list[ItemT]:
    """Return the items of ``items`` visible to ``viewer_id``, order preserved."""
    return [item for item in items if is_visible(item, viewer_id)]
