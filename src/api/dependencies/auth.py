"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(
    auto_error=False,
    description="Token from POST /api/v1/users or POST /api/v1/auth",
)

MISSING_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Get the process-wide token provider."""
    return JWTAuthProvider()


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the caller from the bearer token.

    The token is trusted on its own; the account it names may since have
    been deleted, which routes that load the user report as not found.

    Raises:
        AuthenticationError: No token, or a token that fails verification.
    """
    if not credentials:
        raise AuthenticationError(
            message=MISSING_TOKEN_MESSAGE,
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError(
            message=INVALID_TOKEN_MESSAGE,
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
