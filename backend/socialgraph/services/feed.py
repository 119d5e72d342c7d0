"""Feed Aggregator — visible, deduplicated, newest-first publications for a user.

Invariants:
    - build_feed(u) = publications by u  ∪  publications by users u follows
    - Every item carries its current like count and author handle
    - Like counts come from one GROUP BY query, handles from one IN query:
      three store calls per feed regardless of size
    - An empty feed is a valid result

Design Decisions:
    - Store returns raw rows; dedupe/augment/order happen in core.feed.assemble_feed
      so the ordering rule is tested without a database
"""

import logging

from socialgraph.core.domain_types import (
    FeedItem, PublicationId, PublicationRecord, UserId,
)
from socialgraph.core.feed import assemble_feed
from socialgraph.core.repository_protocols import (
    LikeStore, PublicationStore, UserStore,
)

logger = logging.getLogger(__name__)


class FeedAggregator:
    """Computes feeds and augments publication rows for output."""

    def __init__(
        self,
        publications: PublicationStore,
        likes: LikeStore,
        users: UserStore,
    ):
        self.publications = publications
        self.likes = likes
        self.users = users

    async def build_feed(self, user_id: UserId) -> list[FeedItem]:
        rows = await self.publications.find_feed_for(user_id)
        feed = await self.augment(rows)
        logger.debug(
            f"Feed built with {len(feed)} items", extra={"user_id": user_id},
        )
        return feed

    async def publications_by(self, author_id: UserId) -> list[FeedItem]:
        await self.users.find_by_id(author_id)
        return await self.augment(await self.publications.find_by_author(author_id))

    async def get_publication(self, publication_id: PublicationId) -> FeedItem:
        row = await self.publications.find_by_id(publication_id)
        return (await self.augment([row]))[0]

    async def augment(self, rows: list[PublicationRecord]) -> list[FeedItem]:
        if not rows:
            return []
        like_counts = await self.likes.count_for({r.id for r in rows})
        handles = await self.users.handles_for({r.author_id for r in rows})
        return assemble_feed(rows, like_counts, handles)
