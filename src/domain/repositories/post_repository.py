"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post aggregates."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Rewrite the whole post document.

        Raises ConcurrentModificationError when the stored version no longer
        matches ``post.version``.
        """
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...
