"""Path id parsing.

Ids arrive as free text in the URL. A malformed id can never resolve, so it
is reported as the matching not-found error rather than a validation error.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from core.exceptions import PostNotFoundError, ProfileNotFoundError


def try_parse_id(raw: str) -> UUID | None:
    """Parse a UUID, returning None when the text is not one."""
    try:
        return UUID(raw)
    except ValueError:
        return None


def get_post_id(post_id: str) -> UUID:
    """Resolve the ``{post_id}`` path parameter."""
    parsed = try_parse_id(post_id)
    if parsed is None:
        raise PostNotFoundError(post_id)
    return parsed


def get_profile_user_id(user_id: str) -> UUID:
    """Resolve the ``{user_id}`` path parameter of a profile lookup."""
    parsed = try_parse_id(user_id)
    if parsed is None:
        raise ProfileNotFoundError(user_id)
    return parsed


PostId = Annotated[UUID, Depends(get_post_id)]
ProfileUserId = Annotated[UUID, Depends(get_profile_user_id)]
