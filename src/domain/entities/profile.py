"""Profile aggregate: the profile document and its embedded entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.user import UserSummary

SOCIAL_NETWORKS = ("youtube", "twitter", "instagram", "linkedin", "facebook")


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a developer profile (one per user).

    ``experience`` and ``education`` are ordered most-recent-first.
    ``version`` is bumped on every persisted rewrite.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    location: str | None = None
    website: str | None = None
    bio: str | None = None
    skills: list[str] = field(default_factory=list)
    github_username: str | None = None
    social: dict[str, str] = field(default_factory=dict)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 0


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's display fields."""

    profile: Profile
    owner: UserSummary | None
