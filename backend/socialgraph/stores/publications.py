"""Publication Store — SQLAlchemy implementation of PublicationStore.

Invariants:
    - find_feed_for selects publications whose author is the user or someone the
      user follows, via an IN-subquery (no JOIN, so no duplicated rows)
    - Lists come back newest first (created_at DESC, id DESC)
    - owner_of reads the stored author_id; it is the only input to ownership checks
    - create for an author deleted mid-session raises ResourceNotFoundError(User)
"""

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.core.domain_types import (
    PublicationId, PublicationRecord, UserId,
)
from socialgraph.core.errors import ResourceNotFoundError
from socialgraph.models import FollowEdge, Publication

_NEWEST_FIRST = (Publication.created_at.desc(), Publication.id.desc())


def to_publication_record(publication: Publication) -> PublicationRecord:
    return PublicationRecord(
        id=PublicationId(publication.id),
        title=publication.title,
        content=publication.content,
        author_id=UserId(publication.author_id),
        created_at=publication.created_at,
    )


class SqlPublicationStore:
    """Publications table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, author_id: UserId, title: str, content: str,
    ) -> PublicationRecord:
        publication = Publication(
            author_id=author_id, title=title, content=content,
        )
        self.db.add(publication)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ResourceNotFoundError("User", str(author_id))
        return to_publication_record(publication)

    async def find_by_id(
        self, publication_id: PublicationId,
    ) -> PublicationRecord:
        return to_publication_record(await self._get_or_404(publication_id))

    async def find_feed_for(self, user_id: UserId) -> list[PublicationRecord]:
        followed = select(FollowEdge.followed_id).where(
            FollowEdge.follower_id == user_id,
        )
        result = await self.db.execute(
            select(Publication)
            .where(or_(
                Publication.author_id == user_id,
                Publication.author_id.in_(followed),
            ))
            .order_by(*_NEWEST_FIRST),
        )
        return [to_publication_record(p) for p in result.scalars().all()]

    async def find_by_author(
        self, author_id: UserId,
    ) -> list[PublicationRecord]:
        result = await self.db.execute(
            select(Publication)
            .where(Publication.author_id == author_id)
            .order_by(*_NEWEST_FIRST),
        )
        return [to_publication_record(p) for p in result.scalars().all()]

    async def update(
        self, publication_id: PublicationId, title: str, content: str,
    ) -> PublicationRecord:
        publication = await self._get_or_404(publication_id)
        publication.title = title
        publication.content = content
        await self.db.commit()
        return to_publication_record(publication)

    async def delete(self, publication_id: PublicationId) -> None:
        result = await self.db.execute(
            delete(Publication).where(Publication.id == publication_id)
            .execution_options(synchronize_session=False),
        )
        if not result.rowcount:
            raise ResourceNotFoundError("Publication", str(publication_id))
        await self.db.commit()

    async def owner_of(self, publication_id: PublicationId) -> UserId:
        author_id = await self.db.scalar(
            select(Publication.author_id).where(Publication.id == publication_id),
        )
        if author_id is None:
            raise ResourceNotFoundError("Publication", str(publication_id))
        return UserId(author_id)

    async def _get_or_404(self, publication_id: PublicationId) -> Publication:
        publication = await self.db.get(Publication, publication_id)
        if publication is None:
            raise ResourceNotFoundError("Publication", str(publication_id))
        return publication
