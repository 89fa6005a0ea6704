"""bcrypt password hashing."""

import bcrypt
import structlog

from core.config import settings

logger = structlog.get_logger()


class BcryptPasswordHasher:
    """IPasswordHasher implementation backed by bcrypt."""

    def __init__(self, rounds: int = settings.password_hash_rounds) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against its hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("password_hash_malformed")
            return False
