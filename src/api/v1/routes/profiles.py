"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import ProfileUserId, try_parse_id
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    GitHubRepoListResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profile", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    view = await service.get_for_user(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update own profile",
    responses={400: {"description": "Validation failed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the profile, or update the supplied fields of the existing one."""
    view = await service.upsert(
        user.id,
        status=body.status,
        skills=body.skills,
        company=body.company,
        location=body.location,
        website=body.website,
        bio=body.bio,
        github_username=body.github_username,
        social=body.social_links(),
    )
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile with its owner's name and avatar. Public."""
    views = await service.get_all()
    return ProfileListResponse(data=[ProfileResponse.from_view(v) for v in views])


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile by user id",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: ProfileUserId,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a user's profile. Public."""
    view = await service.get_for_user(user_id)
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete own profile and account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile and user record. Posts are kept."""
    await service.delete_account(user.id)
    return MessageResponse(message="User removed")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an experience entry at the top of the list."""
    view = await service.add_experience(
        user.id,
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry. Unknown ids leave the list unchanged."""
    view = await service.remove_experience(user.id, try_parse_id(exp_id))
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an education entry at the top of the list."""
    view = await service.add_education(
        user.id,
        school=body.school,
        degree=body.degree,
        field_of_study=body.field_of_study,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an education entry",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry. Unknown ids leave the list unchanged."""
    view = await service.remove_education(user.id, try_parse_id(edu_id))
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.get(
    "/github/{username}",
    response_model=GitHubRepoListResponse,
    summary="List a GitHub user's latest repositories",
    responses={404: {"description": "No GitHub profile found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_github_repos(
    request: Request,
    username: str,
    client: GitHubClient = Depends(get_github_client),
) -> GitHubRepoListResponse:
    """Proxy GitHub's public repository listing. Public."""
    repos = await client.list_repos(username)
    return GitHubRepoListResponse(data=repos)
