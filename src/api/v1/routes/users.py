"""User registration and authentication routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_user_service
from api.v1.schemas.user import (
    TokenResponse,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User registered, token issued"},
        409: {"description": "User already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Create an account. The avatar is taken from Gravatar."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)


auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted, token issued"},
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: UserLogin,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for an access token."""
    token = await service.authenticate(email=body.email, password=body.password)
    return TokenResponse(token=token)


@auth_router.get(
    "",
    response_model=UserDetailResponse,
    summary="Get the authenticated user",
    responses={404: {"description": "Account no longer exists"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    """Get the caller's account, without the password hash."""
    account = await service.get_by_id(user.id)
    return UserDetailResponse(data=UserResponse.model_validate(account))
