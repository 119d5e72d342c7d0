"""FollowEdge ORM — directed edge "follower follows followed".

Invariants:
    - (followed_id, follower_id) is the primary key: at most one edge per pair
    - followed_id <> follower_id enforced by a CHECK constraint
    - Both ends cascade on user delete
    - Rows are inserted or deleted by FollowStore.toggle_edge, never updated

Design Decisions:
    - Composite primary key doubles as the unique constraint that turns a lost
      toggle race into an IntegrityError the store can resolve
    - Secondary index on follower_id: feed lookup goes follower -> followed
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from socialgraph.db.base import Base


class FollowEdge(Base):
    """One follow relation."""
    __tablename__ = "followers"
    __table_args__ = (
        CheckConstraint("followed_id <> follower_id", name="ck_followers_no_self"),
        Index("ix_followers_follower_id", "follower_id"),
    )

    followed_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
