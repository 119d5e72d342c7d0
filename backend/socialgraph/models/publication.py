"""Publication ORM — a post owned exclusively by its author.

Invariants:
    - author_id is non-nullable and cascades on user delete
    - Like count is NOT a column: it is derived from the likes table on read

Design Decisions:
    - No denormalized likes counter: a counter column would need its own
      race-safe increment alongside every like toggle
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialgraph.db.base import Base


class Publication(Base):
    """Post authored by one user."""
    __tablename__ = "publications"
    __table_args__ = (
        Index("ix_publications_author_created", "author_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[str] = mapped_column(String(300), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author: Mapped["User"] = relationship("User", back_populates="publications")
