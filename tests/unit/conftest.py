"""Shared fixtures for unit tests."""

from dataclasses import replace
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.user import User


def _bump_version(entity: Any) -> Any:
    return replace(entity, version=entity.version + 1)


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing.

    ``update`` on profiles and posts echoes the entity back with its
    version bumped, like the SQL repositories do.
    """

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.profiles.update.side_effect = _bump_version
        self.posts.update.side_effect = _bump_version
        self.profiles.create.side_effect = lambda profile: profile
        self.posts.create.side_effect = lambda post: post
        self.users.create.side_effect = lambda user: user
        self.users.get_batch.return_value = {}
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def actor_id() -> UUID:
    """A random actor ID (distinct from user_id)."""
    return uuid4()


@pytest.fixture
def author(user_id: UUID) -> User:
    """The account behind ``user_id``."""
    return User(
        id=user_id,
        name="Jane Doe",
        email="jane@example.com",
        password_hash="hash",
        avatar="https://www.gravatar.com/avatar/jane",
    )
