"""Identity directory contract, an in-memory directory, and a result-returning facade."""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from brokerage_admin.exceptions import (
    BrokerageError,
    IdentityDirectoryError,
    ValidationFailedError,
)
from brokerage_admin.models.brokerage import DirectoryUser
from brokerage_admin.results import EntityResult, ListResult, MutationResult

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
SEARCH_SCAN_LIMIT = 1000


class IdentityDirectory(ABC):
    """External user directory. Implementations raise ``IdentityDirectoryError``."""

    @abstractmethod
    def list_users(self, max_results: int = 100) -> list[DirectoryUser]:
        """Return up to ``max_results`` users."""

    @abstractmethod
    def get_user(self, uid: str) -> DirectoryUser:
        """Return one user or raise ``IdentityDirectoryError``."""

    @abstractmethod
    def create_user(self, email: str, password: str) -> DirectoryUser:
        """Register a new user."""

    @abstractmethod
    def update_user(
        self,
        uid: str,
        email: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> DirectoryUser:
        """Change the given attributes; ``None`` leaves an attribute untouched."""

    @abstractmethod
    def delete_user(self, uid: str) -> None:
        """Remove a user."""


class InMemoryIdentityDirectory(IdentityDirectory):
    """Directory double keeping users in a dict. Passwords are not retained."""

    def __init__(self, users: list[DirectoryUser] | None = None) -> None:
        self._users: dict[str, DirectoryUser] = {user.uid: user for user in users or []}

    def _require(self, uid: str) -> DirectoryUser:
        user = self._users.get(uid)
        if user is None:
            raise IdentityDirectoryError(f"No user record found for uid {uid}")
        return user

    def _email_taken(self, email: str, uid: str | None = None) -> bool:
        return any(
            user.email and user.email.lower() == email.lower() and user.uid != uid
            for user in self._users.values()
        )

    def list_users(self, max_results: int = 100) -> list[DirectoryUser]:
        return list(self._users.values())[:max_results]

    def get_user(self, uid: str) -> DirectoryUser:
        return self._require(uid)

    def create_user(self, email: str, password: str) -> DirectoryUser:
        if self._email_taken(email):
            raise IdentityDirectoryError(f"The email address {email} is already in use")
        user = DirectoryUser(
            uid=uuid.uuid4().hex[:28],
            email=email,
            creation_time=datetime.now(timezone.utc).isoformat(),
        )
        self._users[user.uid] = user
        return user

    def update_user(
        self,
        uid: str,
        email: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> DirectoryUser:
        user = self._require(uid)
        if email is not None:
            if self._email_taken(email, uid=uid):
                raise IdentityDirectoryError(f"The email address {email} is already in use")
            user.email = email
        if disabled is not None:
            user.disabled = disabled
        return user

    def delete_user(self, uid: str) -> None:
        self._require(uid)
        del self._users[uid]


class DirectoryService:
    """Result-returning wrapper over an ``IdentityDirectory``.

    Directory faults are reported with the ``IDENTITY_DIRECTORY_FAILED``
    kind, distinct from document store faults.
    """

    def __init__(self, directory: IdentityDirectory) -> None:
        self.directory = directory

    def list_users(self, limit: int = 100) -> ListResult[DirectoryUser]:
        try:
            return ListResult(items=self.directory.list_users(limit))
        except BrokerageError as exc:
            logger.error("Error listing directory users: %s", exc)
            return ListResult.failure(exc)

    def get_user(self, uid: str) -> EntityResult[DirectoryUser]:
        try:
            return EntityResult(entity=self.directory.get_user(uid))
        except BrokerageError as exc:
            logger.error("Error getting directory user %s: %s", uid, exc)
            return EntityResult.failure(exc)

    def search_by_email(self, term: str) -> ListResult[DirectoryUser]:
        """Case-insensitive substring match on email across the first 1000 users."""
        try:
            users = self.directory.list_users(SEARCH_SCAN_LIMIT)
        except BrokerageError as exc:
            logger.error("Error searching directory users: %s", exc)
            return ListResult.failure(exc)
        needle = term.lower()
        return ListResult(items=[u for u in users if u.email and needle in u.email.lower()])

    def create_user(self, email: str, password: str) -> MutationResult:
        try:
            if not email or not password:
                raise ValidationFailedError("Email and password are required")
            if len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationFailedError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            user = self.directory.create_user(email, password)
        except BrokerageError as exc:
            logger.error("Error creating directory user: %s", exc)
            return MutationResult.failure(exc)
        logger.info("Created directory user %s", user.uid)
        return MutationResult.ok(user.uid)

    def update_user(
        self,
        uid: str,
        email: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> MutationResult:
        try:
            if password and len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationFailedError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            self.directory.update_user(
                uid, email=email or None, password=password or None, disabled=disabled
            )
        except BrokerageError as exc:
            logger.error("Error updating directory user %s: %s", uid, exc)
            return MutationResult.failure(exc)
        return MutationResult.ok(uid)

    def delete_user(self, uid: str) -> MutationResult:
        try:
            self.directory.delete_user(uid)
        except BrokerageError as exc:
            logger.error("Error deleting directory user %s: %s", uid, exc)
            return MutationResult.failure(exc)
        return MutationResult.ok(uid)
