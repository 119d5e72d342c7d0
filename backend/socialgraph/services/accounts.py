"""Account Service — registration, login, profile and password management.

Invariants:
    - Passwords reach the store only as CredentialVerifier.hash_password output
    - Login failure is identical for unknown email and wrong password
      (same error, same message, one bcrypt check either way)
    - Profile mutations (update, delete, password change) are owner-only:
      the profile's owner is the user id in the path
    - Password change requires the current password

Design Decisions:
    - Ownership checked before existence for profiles: a non-owner learns
      nothing about whether the target account exists
"""

import logging

from socialgraph.core.authorization import ensure_owner
from socialgraph.core.credentials import CredentialVerifier
from socialgraph.core.domain_types import UserId, UserRecord
from socialgraph.core.errors import CredentialMismatchError
from socialgraph.core.repository_protocols import UserStore
from socialgraph.core.tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AccountService:
    """User lifecycle on top of UserStore."""

    def __init__(
        self,
        users: UserStore,
        credentials: CredentialVerifier,
        issuer: TokenIssuer,
    ):
        self.users = users
        self.credentials = credentials
        self.issuer = issuer

    async def register(
        self, name: str, handle: str, email: str, password: str,
    ) -> UserRecord:
        password_hash = self.credentials.hash_password(password)
        user = await self.users.create(name, handle, email, password_hash)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def login(self, email: str, password: str) -> tuple[str, UserId]:
        """Return (token, user_id) or raise CredentialMismatchError."""
        found = await self.users.find_by_email(email)
        if found is None:
            self.credentials.burn_verification(password)
            raise CredentialMismatchError()
        self.credentials.verify_password(password, found.password_hash)
        token = self.issuer.issue(found.user_id)
        logger.info("User logged in", extra={"user_id": found.user_id})
        return token, found.user_id

    async def get(self, user_id: UserId) -> UserRecord:
        return await self.users.find_by_id(user_id)

    async def search(self, name_or_handle: str) -> list[UserRecord]:
        return await self.users.search(name_or_handle)

    async def update_profile(
        self, actor_id: UserId, user_id: UserId,
        name: str, handle: str, email: str,
    ) -> UserRecord:
        ensure_owner(user_id, actor_id, "User", user_id)
        return await self.users.update(user_id, name, handle, email)

    async def delete_account(self, actor_id: UserId, user_id: UserId) -> None:
        ensure_owner(user_id, actor_id, "User", user_id)
        await self.users.delete(user_id)
        logger.info("User deleted", extra={"user_id": user_id})

    async def change_password(
        self, actor_id: UserId, user_id: UserId, current: str, new: str,
    ) -> None:
        ensure_owner(user_id, actor_id, "User", user_id)
        stored = await self.users.find_password_hash(user_id)
        self.credentials.verify_password(current, stored)
        await self.users.update_password_hash(
            user_id, self.credentials.hash_password(new),
        )
        logger.info("Password changed", extra={"user_id": user_id})
