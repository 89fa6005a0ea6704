"""Post aggregate: the post document with its likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A like left on a post. At most one per user per post."""

    user_id: UUID


@dataclass
class Comment:
    """A comment on a post. ``name`` and ``avatar`` are frozen at creation."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a post.

    ``name`` and ``avatar`` are copied from the author when the post is
    created. ``likes`` and ``comments`` are ordered most-recent-first.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    date: datetime = field(default_factory=datetime.utcnow)
    version: int = 0

    def is_liked_by(self, user_id: UUID) -> bool:
        """Check whether the user already has a like on this post."""
        return any(like.user_id == user_id for like in self.likes)
