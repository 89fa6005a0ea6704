"""Profile service layer with business logic."""

from datetime import date
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, ValidationFailedError
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileWithOwner,
)
from domain.entities.user import User, UserSummary
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.ownership import head_insert, remove_by_id

logger = structlog.get_logger()

# Scalar fields an upsert may set; empty values are ignored.
_PROFILE_FIELDS = ("company", "location", "website", "bio", "status", "github_username")


def parse_skills(text: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty entries."""
    return [skill.strip() for skill in text.split(",") if skill.strip()]


def _summary(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, avatar=user.avatar)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get every profile with its owner's name and avatar."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_batch([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=p, owner=_summary(owners.get(p.user_id)))
                for p in profiles
            ]

    async def get_for_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get the profile owned by ``user_id``.

        Raises:
            ProfileNotFoundError: The user has no profile.
        """
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            return await self._with_owner(uow, profile)

    async def upsert(
        self,
        user_id: UUID,
        *,
        status: Optional[str] = None,
        skills: Optional[str] = None,
        company: Optional[str] = None,
        location: Optional[str] = None,
        website: Optional[str] = None,
        bio: Optional[str] = None,
        github_username: Optional[str] = None,
        social: Optional[dict[str, Optional[str]]] = None,
    ) -> ProfileWithOwner:
        """Create the caller's profile, or merge the supplied fields into it.

        Only non-empty arguments are applied; nothing is ever cleared.
        Social links merge per network. On create, ``status`` and ``skills``
        are mandatory. Returns the stored document after the write.

        Raises:
            ValidationFailedError: Creating without status or skills.
        """
        supplied = {
            name: value
            for name, value in {
                "company": company,
                "location": location,
                "website": website,
                "bio": bio,
                "status": status,
                "github_username": github_username,
            }.items()
            if value
        }
        parsed_skills = parse_skills(skills) if skills else []
        social_links = {
            network: link
            for network, link in (social or {}).items()
            if network in SOCIAL_NETWORKS and link
        }

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)

            if profile is None:
                missing: dict[str, str] = {}
                if "status" not in supplied:
                    missing["status"] = "Status is required"
                if not parsed_skills:
                    missing["skills"] = "Skills are required"
                if missing:
                    (field, message), *rest = missing.items()
                    raise ValidationFailedError(field, message, more=dict(rest))

                profile = Profile(user_id=user_id, status=supplied["status"])
                self._apply(profile, supplied, parsed_skills, social_links)
                saved = await uow.profiles.create(profile)
                event = "profile_created"
            else:
                self._apply(profile, supplied, parsed_skills, social_links)
                saved = await uow.profiles.update(profile)
                event = "profile_updated"

            await uow.commit()
            logger.info(event, user_id=str(user_id), profile_id=str(saved.id))
            return await self._with_owner(uow, saved)

    async def add_experience(
        self,
        user_id: UUID,
        *,
        title: str,
        company: str,
        from_date: date,
        location: Optional[str] = None,
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> ProfileWithOwner:
        """Add an experience entry at the head of the caller's list."""
        entry = ExperienceEntry(
            title=title,
            company=company,
            location=location,
            from_date=from_date,
            to_date=to_date,
            current=current,
            description=description,
        )
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            head_insert(profile.experience, entry)
            saved = await uow.profiles.update(profile)
            await uow.commit()

            logger.info("experience_added", user_id=str(user_id), entry_id=str(entry.id))
            return await self._with_owner(uow, saved)

    async def remove_experience(
        self, user_id: UUID, experience_id: UUID | None
    ) -> ProfileWithOwner:
        """Remove an experience entry by id.

        An unknown (or unparseable, passed as None) id removes nothing and
        still succeeds; the profile is rewritten either way.
        """
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            removed = remove_by_id(profile.experience, experience_id)
            saved = await uow.profiles.update(profile)
            await uow.commit()

            logger.info(
                "experience_removed",
                user_id=str(user_id),
                entry_id=str(experience_id),
                found=removed is not None,
            )
            return await self._with_owner(uow, saved)

    async def add_education(
        self,
        user_id: UUID,
        *,
        school: str,
        degree: str,
        field_of_study: str,
        from_date: date,
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> ProfileWithOwner:
        """Add an education entry at the head of the caller's list."""
        entry = EducationEntry(
            school=school,
            degree=degree,
            field_of_study=field_of_study,
            from_date=from_date,
            to_date=to_date,
            current=current,
            description=description,
        )
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            head_insert(profile.education, entry)
            saved = await uow.profiles.update(profile)
            await uow.commit()

            logger.info("education_added", user_id=str(user_id), entry_id=str(entry.id))
            return await self._with_owner(uow, saved)

    async def remove_education(
        self, user_id: UUID, education_id: UUID | None
    ) -> ProfileWithOwner:
        """Remove an education entry by id. Unknown ids are a no-op."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            removed = remove_by_id(profile.education, education_id)
            saved = await uow.profiles.update(profile)
            await uow.commit()

            logger.info(
                "education_removed",
                user_id=str(user_id),
                entry_id=str(education_id),
                found=removed is not None,
            )
            return await self._with_owner(uow, saved)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the caller's profile and user record.

        Posts, likes and comments the user authored are left in place.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user_id(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id))

    @staticmethod
    def _apply(
        profile: Profile,
        supplied: dict[str, str],
        skills: list[str],
        social: dict[str, str],
    ) -> None:
        for name in _PROFILE_FIELDS:
            if name in supplied:
                setattr(profile, name, supplied[name])
        if skills:
            profile.skills = skills
        profile.social.update(social)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user_id(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _with_owner(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        owner = await uow.users.get(profile.user_id)
        return ProfileWithOwner(profile=profile, owner=_summary(owner))
