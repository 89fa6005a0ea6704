"""Unit tests for Post service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService

# FakeUnitOfWork is provided by the shared conftest at tests/unit/conftest.py.
# Import it here only for type-hint usage in fixtures/tests.
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork, author: User) -> PostService:
    """Create service with fake UoW whose user lookup finds the author."""
    uow.users.get.return_value = author
    return PostService(lambda: uow)


@pytest.fixture
def post(user_id: UUID) -> Post:
    return Post(user_id=user_id, text="Hello", name="Jane Doe")


class TestPostServiceCreate:
    @pytest.mark.asyncio
    async def test_copies_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, author: User
    ) -> None:
        result = await service.create(user_id, "First post")

        assert result.user_id == user_id
        assert result.text == "First post"
        assert result.name == author.name
        assert result.avatar == author.avatar
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_author_is_gone(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "Orphan")

        uow.posts.create.assert_not_called()


class TestPostServiceGet:
    @pytest.mark.asyncio
    async def test_returns_post(
        self, service: PostService, uow: FakeUnitOfWork, post: Post
    ) -> None:
        uow.posts.get.return_value = post

        assert await service.get_by_id(post.id) is post

    @pytest.mark.asyncio
    async def test_raises_when_not_found(
        self, service: PostService, uow: FakeUnitOfWork
    ) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.get_by_id(uuid4())

    @pytest.mark.asyncio
    async def test_get_all_passes_repository_order_through(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        posts = [Post(user_id=user_id, text=t, name="n") for t in ("new", "old")]
        uow.posts.get_all.return_value = posts

        assert await service.get_all() == posts


class TestPostServiceDelete:
    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post
    ) -> None:
        uow.posts.get.return_value = post

        await service.delete(post.id, post.user_id)

        uow.posts.delete.assert_called_once_with(post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(post.id, actor_id)

        assert exc_info.value.message == "User not authorized"
        uow.posts.delete.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_post(self, service: PostService, uow: FakeUnitOfWork) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete(uuid4(), uuid4())


class TestPostServiceLikes:
    @pytest.mark.asyncio
    async def test_like_inserts_at_head(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        earlier = Like(user_id=uuid4())
        post.likes = [earlier]
        uow.posts.get.return_value = post

        likes = await service.like(post.id, actor_id)

        assert [like.user_id for like in likes] == [actor_id, earlier.user_id]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_second_like_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        post.likes = [Like(user_id=actor_id)]
        uow.posts.get.return_value = post

        with pytest.raises(PostAlreadyLikedError):
            await service.like(post.id, actor_id)

        uow.posts.update.assert_not_called()
        assert len(post.likes) == 1

    @pytest.mark.asyncio
    async def test_author_may_like_own_post(
        self, service: PostService, uow: FakeUnitOfWork, post: Post
    ) -> None:
        uow.posts.get.return_value = post

        likes = await service.like(post.id, post.user_id)

        assert [like.user_id for like in likes] == [post.user_id]

    @pytest.mark.asyncio
    async def test_unlike_removes_only_callers_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        first, second = uuid4(), uuid4()
        post.likes = [Like(user_id=first), Like(user_id=actor_id), Like(user_id=second)]
        uow.posts.get.return_value = post

        likes = await service.unlike(post.id, actor_id)

        assert [like.user_id for like in likes] == [first, second]

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        post.likes = [Like(user_id=uuid4())]
        uow.posts.get.return_value = post

        with pytest.raises(PostNotLikedError):
            await service.unlike(post.id, actor_id)

        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_like_missing_post(self, service: PostService, uow: FakeUnitOfWork) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(uuid4(), uuid4())


class TestPostServiceComments:
    @pytest.mark.asyncio
    async def test_add_comment_at_head_with_author_details(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        post: Post,
        user_id: UUID,
        author: User,
    ) -> None:
        older = Comment(user_id=uuid4(), text="first", name="Someone")
        post.comments = [older]
        uow.posts.get.return_value = post

        result = await service.add_comment(post.id, user_id, "second")

        assert [c.text for c in result.comments] == ["second", "first"]
        newest = result.comments[0]
        assert newest.user_id == user_id
        assert newest.name == author.name
        assert newest.avatar == author.avatar

    @pytest.mark.asyncio
    async def test_add_comment_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.add_comment(uuid4(), user_id, "text")

    @pytest.mark.asyncio
    async def test_comment_author_can_delete_on_someone_elses_post(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        keep = Comment(user_id=post.user_id, text="keep", name="Jane Doe")
        mine = Comment(user_id=actor_id, text="mine", name="Actor")
        post.comments = [mine, keep]
        uow.posts.get.return_value = post

        result = await service.delete_comment(post.id, mine.id, actor_id)

        assert [c.text for c in result.comments] == ["keep"]

    @pytest.mark.asyncio
    async def test_delete_middle_comment_keeps_order_of_rest(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        newest = Comment(user_id=post.user_id, text="c", name="Jane Doe")
        middle = Comment(user_id=actor_id, text="b", name="Actor")
        oldest = Comment(user_id=post.user_id, text="a", name="Jane Doe")
        post.comments = [newest, middle, oldest]
        uow.posts.get.return_value = post

        result = await service.delete_comment(post.id, middle.id, actor_id)

        assert [c.id for c in result.comments] == [newest.id, oldest.id]
        uow.posts.update.assert_called_once()

    @pytest.mark.asyncio
    async def test_post_author_cannot_delete_others_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, actor_id: UUID
    ) -> None:
        theirs = Comment(user_id=actor_id, text="theirs", name="Actor")
        post.comments = [theirs]
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.delete_comment(post.id, theirs.id, post.user_id)

        uow.posts.update.assert_not_called()
        assert len(post.comments) == 1

    @pytest.mark.asyncio
    async def test_unknown_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post
    ) -> None:
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError):
            await service.delete_comment(post.id, uuid4(), post.user_id)

        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_unparseable_comment_id(
        self, service: PostService, uow: FakeUnitOfWork, post: Post
    ) -> None:
        post.comments = [Comment(user_id=post.user_id, text="x", name="n")]
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError):
            await service.delete_comment(post.id, None, post.user_id)

        uow.posts.update.assert_not_called()
