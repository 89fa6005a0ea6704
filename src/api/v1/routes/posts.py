"""Post API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import PostId, try_parse_id
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    LikeListResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Create a post as the authenticated user."""
    post = await service.create(user.id, body.text)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.get(
    "",
    response_model=PostListResponse,
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """Get all posts, most recent first."""
    posts = await service.get_all()
    return PostListResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Get a single post by id."""
    post = await service.get_by_id(post_id)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        403: {"description": "User not authorized"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only the author may delete it."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/{post_id}/likes",
    response_model=LikeListResponse,
    summary="Like a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post already liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Like a post. Returns the updated likes."""
    likes = await service.like(post_id, user.id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.delete(
    "/{post_id}/likes",
    response_model=LikeListResponse,
    summary="Unlike a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post has not yet been liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: PostId,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> LikeListResponse:
    """Remove the caller's like. Returns the updated likes."""
    likes = await service.unlike(post_id, user.id)
    return LikeListResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.post(
    "/{post_id}/comments",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: PostId,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Add a comment. Returns the whole post."""
    post = await service.add_comment(post_id, user.id, body.text)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=PostDetailResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Not the comment's author"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: PostId,
    comment_id: str,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostDetailResponse:
    """Delete a comment. Only the comment's author may delete it."""
    post = await service.delete_comment(post_id, try_parse_id(comment_id), user.id)
    return PostDetailResponse(data=PostResponse.model_validate(post))
