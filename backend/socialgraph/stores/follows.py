"""Follow Store — SQLAlchemy implementation of FollowStore.

Invariants:
    - toggle_edge locks both user rows (ascending id order) before flipping the edge,
      so two toggles on the same pair never interleave on PostgreSQL
    - Following a nonexistent user raises ResourceNotFoundError
    - Self-pairs are rejected by the service before reaching here, and by the
      ck_followers_no_self CHECK constraint if they ever do
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.core.domain_types import EdgeState, UserId, UserRecord
from socialgraph.core.errors import ResourceNotFoundError
from socialgraph.models import FollowEdge, User
from socialgraph.stores.edge_toggle import toggle_pair
from socialgraph.stores.users import to_user_record


class SqlFollowStore:
    """Followers table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def toggle_edge(
        self, followed_id: UserId, follower_id: UserId,
    ) -> EdgeState:
        await self._lock_users(followed_id, follower_id)
        return await toggle_pair(
            self.db, FollowEdge,
            {"followed_id": followed_id, "follower_id": follower_id},
        )

    async def list_followers(self, user_id: UserId) -> list[UserRecord]:
        result = await self.db.execute(
            select(User)
            .join(FollowEdge, FollowEdge.follower_id == User.id)
            .where(FollowEdge.followed_id == user_id)
            .order_by(User.id),
        )
        return [to_user_record(u) for u in result.scalars().all()]

    async def list_following(self, user_id: UserId) -> list[UserRecord]:
        result = await self.db.execute(
            select(User)
            .join(FollowEdge, FollowEdge.followed_id == User.id)
            .where(FollowEdge.follower_id == user_id)
            .order_by(User.id),
        )
        return [to_user_record(u) for u in result.scalars().all()]

    async def _lock_users(self, *user_ids: UserId) -> None:
        result = await self.db.execute(
            select(User.id)
            .where(User.id.in_(user_ids))
            .order_by(User.id)
            .with_for_update(),
        )
        found = set(result.scalars().all())
        for user_id in user_ids:
            if user_id not in found:
                raise ResourceNotFoundError("User", str(user_id))
