"""User service layer: registration, login and account lookup."""

import hashlib
from typing import Callable
from urllib.parse import urlencode
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher, TokenUser

logger = structlog.get_logger()

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the Gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"


class UserService:
    """Service layer for the identity store."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return an access token for it.

        Raises:
            UserAlreadyExistsError: The email is already registered.
        """
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name.strip(),
                email=email,
                password_hash=self._hasher.hash(password),
                avatar=gravatar_url(email),
            )
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # A concurrent registration took the email between lookup and insert.
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    raise UserAlreadyExistsError(email) from exc
                raise

        logger.info("user_registered", user_id=str(created.id))
        return self._issue_token(created)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return an access token.

        Unknown emails and wrong passwords raise the same error.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not self._hasher.verify(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return self._issue_token(user)

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user record.

        Raises:
            UserNotFoundError: No such account (e.g. deleted after the token was issued).
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    def _issue_token(self, user: User) -> str:
        return self._auth.create_token(TokenUser(id=user.id, email=user.email, name=user.name))
