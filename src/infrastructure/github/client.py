"""GitHub REST client for listing a user's public repositories."""

from typing import Any

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = structlog.get_logger()


class GitHubClient:
    """Thin async wrapper around ``GET /users/{username}/repos``."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
        repo_count: int = settings.github_repo_count,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._repo_count = repo_count
        self._transport = transport

    async def list_repos(self, username: str) -> list[dict[str, Any]]:
        """Return the most recently created public repos of ``username``.

        Raises:
            GitHubProfileNotFoundError: GitHub answered with anything but 200,
                or could not be reached.
        """
        params: dict[str, str | int] = {
            "per_page": self._repo_count,
            "sort": "created",
            "direction": "desc",
        }
        auth = None
        if self._client_id and self._client_secret:
            auth = httpx.BasicAuth(self._client_id, self._client_secret)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"Accept": "application/vnd.github+json"},
            ) as client:
                response = await client.get(f"/users/{username}/repos", params=params, auth=auth)
        except httpx.HTTPError as e:
            logger.warning("github_request_failed", username=username, error=str(e))
            raise GitHubProfileNotFoundError(username) from e

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubProfileNotFoundError(username)

        repos: list[dict[str, Any]] = response.json()
        return repos
