"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.entities.profile import ProfileWithOwner


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated list. Omitted fields keep their stored value;
    ``status`` and ``skills`` are checked for presence only when the profile
    does not exist yet.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "status": "Developer",
                "skills": "python, fastapi, postgres",
                "company": "Acme",
                "github_username": "octocat",
                "twitter": "https://twitter.com/octocat",
            }
        },
    )

    status: str | None = Field(None, max_length=100)
    skills: str | None = None
    company: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    bio: str | None = None
    github_username: str | None = Field(None, max_length=100)
    youtube: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    facebook: str | None = None

    def social_links(self) -> dict[str, str | None]:
        """Collect the per-network link fields."""
        return {
            "youtube": self.youtube,
            "twitter": self.twitter,
            "instagram": self.instagram,
            "linkedin": self.linkedin,
            "facebook": self.facebook,
        }


class _DatedEntry(BaseModel):
    """Shared ``from``/``to`` handling for experience and education input."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> "_DatedEntry":
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("From date must be before the end date")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., min_length=1, max_length=255, alias="fieldofstudy")


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str = Field(..., alias="fieldofstudy")
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class SocialLinks(BaseModel):
    """Schema for a profile's social links."""

    youtube: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    facebook: str | None = None


class ProfileOwner(BaseModel):
    """Display fields of the profile's user."""

    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user_id: UUID
    user: ProfileOwner | None = None
    status: str
    skills: list[str]
    company: str | None = None
    location: str | None = None
    website: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime

    @classmethod
    def from_view(cls, view: ProfileWithOwner) -> "ProfileResponse":
        """Build the response from a profile and its owner."""
        profile = view.profile
        owner = view.owner
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            user=(
                ProfileOwner(id=owner.id, name=owner.name, avatar=owner.avatar)
                if owner
                else None
            ),
            status=profile.status,
            skills=profile.skills,
            company=profile.company,
            location=profile.location,
            website=profile.website,
            bio=profile.bio,
            github_username=profile.github_username,
            social=SocialLinks(**profile.social),
            experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
            education=[EducationResponse.model_validate(e) for e in profile.education],
            created_at=profile.created_at,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class GitHubRepoListResponse(BaseModel):
    """Repositories as returned by the GitHub API."""

    data: list[dict[str, Any]]
