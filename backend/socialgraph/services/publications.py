"""Publication Service — create, update and delete publications with ownership enforcement.

Invariants:
    - author_id always comes from the authenticated user, never from the request body
    - update/delete load the STORED owner via owner_of, then ensure_owner:
      missing publication -> 404, someone else's publication -> 403
    - A rejected update/delete leaves the publication unchanged
"""

import logging

from socialgraph.core.authorization import ensure_owner
from socialgraph.core.domain_types import FeedItem, PublicationId, UserId
from socialgraph.core.repository_protocols import PublicationStore
from socialgraph.services.feed import FeedAggregator

logger = logging.getLogger(__name__)


class PublicationService:
    """Owner-checked publication writes; reads go through FeedAggregator."""

    def __init__(self, publications: PublicationStore, feed: FeedAggregator):
        self.publications = publications
        self.feed = feed

    async def create(
        self, author_id: UserId, title: str, content: str,
    ) -> FeedItem:
        record = await self.publications.create(author_id, title, content)
        logger.info(
            f"Publication {record.id} created", extra={"user_id": author_id},
        )
        return (await self.feed.augment([record]))[0]

    async def update(
        self, actor_id: UserId, publication_id: PublicationId,
        title: str, content: str,
    ) -> FeedItem:
        owner_id = await self.publications.owner_of(publication_id)
        ensure_owner(owner_id, actor_id, "Publication", publication_id)
        record = await self.publications.update(publication_id, title, content)
        return (await self.feed.augment([record]))[0]

    async def delete(
        self, actor_id: UserId, publication_id: PublicationId,
    ) -> None:
        owner_id = await self.publications.owner_of(publication_id)
        ensure_owner(owner_id, actor_id, "Publication", publication_id)
        await self.publications.delete(publication_id)
        logger.info(
            f"Publication {publication_id} deleted", extra={"user_id": actor_id},
        )
