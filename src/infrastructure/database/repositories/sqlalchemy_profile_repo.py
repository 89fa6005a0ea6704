"""SQLAlchemy implementation of Profile repository."""

from dataclasses import replace
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile
from infrastructure.database.models import ProfileModel


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _format_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Rewrite the profile if nobody else wrote it since it was loaded."""
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == profile.id,
                ProfileModel.version == profile.version,
            )
            .values(
                company=profile.company,
                location=profile.location,
                website=profile.website,
                bio=profile.bio,
                status=profile.status,
                skills=list(profile.skills),
                github_username=profile.github_username,
                social=dict(profile.social),
                experience=[self._experience_to_json(e) for e in profile.experience],
                education=[self._education_to_json(e) for e in profile.education],
                version=profile.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("profile", str(profile.id))

        return replace(profile, version=profile.version + 1)

    async def delete_by_user_id(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            location=model.location,
            website=model.website,
            bio=model.bio,
            status=model.status,
            skills=list(model.skills or []),
            github_username=model.github_username,
            social=dict(model.social or {}),
            experience=[self._experience_from_json(e) for e in model.experience or []],
            education=[self._education_from_json(e) for e in model.education or []],
            created_at=model.created_at,
            version=model.version,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            location=entity.location,
            website=entity.website,
            bio=entity.bio,
            status=entity.status,
            skills=list(entity.skills),
            github_username=entity.github_username,
            social=dict(entity.social),
            experience=[self._experience_to_json(e) for e in entity.experience],
            education=[self._education_to_json(e) for e in entity.education],
            created_at=entity.created_at,
            version=entity.version,
        )

    @staticmethod
    def _experience_to_json(entry: ExperienceEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": _format_date(entry.from_date),
            "to": _format_date(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_json(data: dict[str, Any]) -> ExperienceEntry:
        return ExperienceEntry(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from"]),
            to_date=_parse_date(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_json(entry: EducationEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from": _format_date(entry.from_date),
            "to": _format_date(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_json(data: dict[str, Any]) -> EducationEntry:
        return EducationEntry(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["field_of_study"],
            from_date=date.fromisoformat(data["from"]),
            to_date=_parse_date(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
