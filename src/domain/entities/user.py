"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for a registered account."""

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Emails are stored lower-cased so lookups are case-insensitive."""
        self.email = self.email.strip().lower()


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only value object: the public display fields of a user."""

    id: UUID
    name: str
    avatar: str | None
