"""LikeEdge ORM — "user likes publication" (existence, not magnitude).

Invariants:
    - (user_id, publication_id) is the primary key: at most one like per pair
    - Cascades on user delete and on publication delete
    - Rows are inserted or deleted by LikeStore.toggle_edge, never updated
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from socialgraph.db.base import Base


class LikeEdge(Base):
    """One like relation."""
    __tablename__ = "likes"
    __table_args__ = (
        Index("ix_likes_publication_id", "publication_id"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    publication_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("publications.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
