"""SQLAlchemy implementation of Post repository."""

from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = select(PostModel).order_by(PostModel.date.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Rewrite the post if nobody else wrote it since it was loaded."""
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id, PostModel.version == post.version)
            .values(
                text=post.text,
                likes=[self._like_to_json(like) for like in post.likes],
                comments=[self._comment_to_json(c) for c in post.comments],
                version=post.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("post", str(post.id))

        return replace(post, version=post.version + 1)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=[self._like_from_json(item) for item in model.likes or []],
            comments=[self._comment_from_json(item) for item in model.comments or []],
            date=model.date,
            version=model.version,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            user_id=entity.user_id,
            text=entity.text,
            name=entity.name,
            avatar=entity.avatar,
            likes=[self._like_to_json(like) for like in entity.likes],
            comments=[self._comment_to_json(c) for c in entity.comments],
            date=entity.date,
            version=entity.version,
        )

    @staticmethod
    def _like_to_json(like: Like) -> dict[str, Any]:
        return {"user_id": str(like.user_id)}

    @staticmethod
    def _like_from_json(data: dict[str, Any]) -> Like:
        return Like(user_id=UUID(data["user_id"]))

    @staticmethod
    def _comment_to_json(comment: Comment) -> dict[str, Any]:
        return {
            "id": str(comment.id),
            "user_id": str(comment.user_id),
            "text": comment.text,
            "name": comment.name,
            "avatar": comment.avatar,
            "date": comment.date.isoformat(),
        }

    @staticmethod
    def _comment_from_json(data: dict[str, Any]) -> Comment:
        return Comment(
            id=UUID(data["id"]),
            user_id=UUID(data["user_id"]),
            text=data["text"],
            name=data["name"],
            avatar=data.get("avatar"),
            date=datetime.fromisoformat(data["date"]),
        )
