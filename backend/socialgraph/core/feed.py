"""Feed Assembly — dedupe, augment and order publications. Pure, no IO.

Invariants:
    - Each publication id appears exactly once in the output
    - likes comes from the per-id count map; missing id means 0 likes
    - Order is total: created_at DESC, then id DESC
    - Empty input yields an empty feed (not an error)

Design Decisions:
    - Like counts arrive pre-aggregated (GROUP BY publication_id) instead of via a
      row-multiplying JOIN, so adding another joined relation later cannot inflate them
    - Author handles arrive as a map: one lookup per distinct author, not per row
"""

from typing import Iterable, Mapping

from socialgraph.core.domain_types import (
    FeedItem, PublicationId, PublicationRecord, UserId,
)

UNKNOWN_HANDLE = ""


def feed_order_key(item: FeedItem) -> tuple:
    return (item.created_at, item.id)


def assemble_feed(
    publications: Iterable[PublicationRecord],
    like_counts: Mapping[PublicationId, int],
    handles: Mapping[UserId, str],
) -> list[FeedItem]:
    """Build the ordered, deduplicated feed from raw store rows."""
    unique: dict[PublicationId, PublicationRecord] = {}
    for publication in publications:
        unique.setdefault(publication.id, publication)

    items = [
        FeedItem(
            id=p.id,
            title=p.title,
            content=p.content,
            author_id=p.author_id,
            author_handle=handles.get(p.author_id, UNKNOWN_HANDLE),
            likes=like_counts.get(p.id, 0),
            created_at=p.created_at,
        )
        for p in unique.values()
    ]
    items.sort(key=feed_order_key, reverse=True)
    return items

