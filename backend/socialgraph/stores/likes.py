"""Like Store — SQLAlchemy implementation of LikeStore.

Invariants:
    - toggle_edge locks the publication row before flipping the edge
    - Liking a nonexistent publication raises ResourceNotFoundError
    - count_for aggregates with GROUP BY publication_id; ids with no likes are absent
      from the map (callers default to 0)
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.core.domain_types import EdgeState, PublicationId, UserId
from socialgraph.core.errors import ResourceNotFoundError
from socialgraph.models import LikeEdge, Publication
from socialgraph.stores.edge_toggle import toggle_pair


class SqlLikeStore:
    """Likes table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def toggle_edge(
        self, user_id: UserId, publication_id: PublicationId,
    ) -> EdgeState:
        locked = await self.db.scalar(
            select(Publication.id)
            .where(Publication.id == publication_id)
            .with_for_update(),
        )
        if locked is None:
            raise ResourceNotFoundError("Publication", str(publication_id))
        return await toggle_pair(
            self.db, LikeEdge,
            {"user_id": user_id, "publication_id": publication_id},
        )

    async def count_for(
        self, publication_ids: set[PublicationId],
    ) -> dict[PublicationId, int]:
        if not publication_ids:
            return {}
        result = await self.db.execute(
            select(LikeEdge.publication_id, func.count())
            .where(LikeEdge.publication_id.in_(publication_ids))
            .group_by(LikeEdge.publication_id),
        )
        return {PublicationId(pid): count for pid, count in result}
