"""Relationship Toggles — follow and like presence-flips.

Invariants:
    - Each call performs exactly one transition (ABSENT <-> PRESENT) and returns the new state
    - Self-follow raises ValidationError before touching the store
    - Toggles are not idempotent: callers must not blindly retry a successful call
    - No retries here; store failures propagate as DatabaseError

Design Decisions:
    - RelationshipToggle and LikeToggle stay separate classes even though the store
      algorithm is shared (stores/edge_toggle.py): their input rules differ
"""

import logging

from socialgraph.core.domain_types import (
    EdgeState, PublicationId, UserId, UserRecord,
)
from socialgraph.core.repository_protocols import FollowStore, LikeStore, UserStore
from socialgraph.core.toggles import validate_follow_pair

logger = logging.getLogger(__name__)


class RelationshipToggle:
    """Follow graph: toggle and list."""

    def __init__(self, follows: FollowStore, users: UserStore):
        self.follows = follows
        self.users = users

    async def toggle(self, follower_id: UserId, followed_id: UserId) -> EdgeState:
        validate_follow_pair(follower_id, followed_id)
        state = await self.follows.toggle_edge(followed_id, follower_id)
        logger.info(
            f"Follow {follower_id}->{followed_id} is now {state.value}",
            extra={"user_id": follower_id},
        )
        return state

    async def followers(self, user_id: UserId) -> list[UserRecord]:
        await self.users.find_by_id(user_id)
        return await self.follows.list_followers(user_id)

    async def following(self, user_id: UserId) -> list[UserRecord]:
        await self.users.find_by_id(user_id)
        return await self.follows.list_following(user_id)


class LikeToggle:
    """Like graph: toggle and report the resulting count."""

    def __init__(self, likes: LikeStore):
        self.likes = likes

    async def toggle(
        self, user_id: UserId, publication_id: PublicationId,
    ) -> tuple[EdgeState, int]:
        state = await self.likes.toggle_edge(user_id, publication_id)
        counts = await self.likes.count_for({publication_id})
        logger.info(
            f"Like {user_id}->{publication_id} is now {state.value}",
            extra={"user_id": user_id},
        )
        return state, counts.get(publication_id, 0)
