"""Post service layer with business logic."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.ownership import (
    find_index,
    head_insert,
    index_of_id,
    remove_at,
    require_owner,
)

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, copying the author's current name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a post.

        Raises:
            PostNotFoundError: No such post.
        """
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so.

        Raises:
            PostNotFoundError: No such post.
            AuthorizationError: The caller did not write the post.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            require_owner(post.user_id, user_id)
            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Add the caller's like at the head of the list.

        Raises:
            PostAlreadyLikedError: The caller already liked the post.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            head_insert(post.likes, Like(user_id=user_id))
            saved = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_liked", post_id=str(post_id), user_id=str(user_id))
        return saved.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Remove the caller's like.

        Raises:
            PostNotLikedError: The caller has not liked the post.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            index = find_index(post.likes, lambda like: like.user_id == user_id)
            if index is None:
                raise PostNotLikedError(str(post_id))

            remove_at(post.likes, index)
            saved = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_unliked", post_id=str(post_id), user_id=str(user_id))
        return saved.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> Post:
        """Add a comment at the head of the post's comments."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            author = await self._require_user(uow, user_id)
            comment = Comment(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            head_insert(post.comments, comment)
            saved = await uow.posts.update(post)
            await uow.commit()

        logger.info(
            "comment_added",
            post_id=str(post_id),
            comment_id=str(comment.id),
            user_id=str(user_id),
        )
        return saved

    async def delete_comment(
        self, post_id: UUID, comment_id: UUID | None, user_id: UUID
    ) -> Post:
        """Remove a comment. Only the comment's author may do so.

        Ownership is checked against the comment, not the post.

        Raises:
            PostNotFoundError: No such post.
            CommentNotFoundError: No comment with that id on the post.
            AuthorizationError: The caller did not write the comment.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            index = index_of_id(post.comments, comment_id)
            if index is None:
                raise CommentNotFoundError(str(comment_id))

            require_owner(
                post.comments[index].user_id,
                user_id,
                "You are not authorized to delete this comment",
            )
            remove_at(post.comments, index)
            saved = await uow.posts.update(post)
            await uow.commit()

        logger.info(
            "comment_deleted",
            post_id=str(post_id),
            comment_id=str(comment_id),
            user_id=str(user_id),
        )
        return saved

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
