"""Boundary Protocols — narrow store contracts between services and persistence.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy stores directly
    - Store methods return frozen records (core/domain_types.py), never ORM objects
    - Lookups by id raise ResourceNotFoundError when the row is absent
    - toggle_edge performs check-then-act atomically and returns the resulting EdgeState

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure core never awaits
"""

from typing import Protocol

from socialgraph.core.domain_types import (
    Credentials, EdgeState, PublicationId, PublicationRecord, UserId, UserRecord,
)


class UserStore(Protocol):
    """Contract for user persistence."""
    async def find_by_email(self, email: str) -> Credentials | None: ...
    async def find_by_id(self, user_id: UserId) -> UserRecord: ...
    async def search(self, name_or_handle: str) -> list[UserRecord]: ...
    async def create(
        self, name: str, handle: str, email: str, password_hash: str,
    ) -> UserRecord: ...
    async def update(
        self, user_id: UserId, name: str, handle: str, email: str,
    ) -> UserRecord: ...
    async def delete(self, user_id: UserId) -> None: ...
    async def find_password_hash(self, user_id: UserId) -> str: ...
    async def update_password_hash(
        self, user_id: UserId, password_hash: str,
    ) -> None: ...
    async def handles_for(self, user_ids: set[UserId]) -> dict[UserId, str]: ...


class PublicationStore(Protocol):
    """Contract for publication persistence."""
    async def create(
        self, author_id: UserId, title: str, content: str,
    ) -> PublicationRecord: ...
    async def find_by_id(
        self, publication_id: PublicationId,
    ) -> PublicationRecord: ...
    async def find_feed_for(self, user_id: UserId) -> list[PublicationRecord]: ...
    async def find_by_author(
        self, author_id: UserId,
    ) -> list[PublicationRecord]: ...
    async def update(
        self, publication_id: PublicationId, title: str, content: str,
    ) -> PublicationRecord: ...
    async def delete(self, publication_id: PublicationId) -> None: ...
    async def owner_of(self, publication_id: PublicationId) -> UserId: ...


class FollowStore(Protocol):
    """Contract for the follow graph. followed_id first, follower_id second."""
    async def toggle_edge(
        self, followed_id: UserId, follower_id: UserId,
    ) -> EdgeState: ...
    async def list_followers(self, user_id: UserId) -> list[UserRecord]: ...
    async def list_following(self, user_id: UserId) -> list[UserRecord]: ...


class LikeStore(Protocol):
    """Contract for the like graph."""
    async def toggle_edge(
        self, user_id: UserId, publication_id: PublicationId,
    ) -> EdgeState: ...
    async def count_for(
        self, publication_ids: set[PublicationId],
    ) -> dict[PublicationId, int]: ...
