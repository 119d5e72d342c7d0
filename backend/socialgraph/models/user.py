"""User ORM — accounts, the owners of publications and endpoints of both graphs.

Invariants:
    - id is an autoincrement integer primary key
    - handle and email are unique (store-enforced; IntegrityError -> ConflictError)
    - password_hash only ever holds CredentialVerifier output
    - Deleting a user cascades to publications, follow edges, and like edges

Design Decisions:
    - ondelete="CASCADE" at the DB level plus passive_deletes on relationships:
      the database does the cascade, the ORM does not load children to delete them
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialgraph.db.base import Base


class User(Base):
    """Registered account."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    handle: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    publications: Mapped[list["Publication"]] = relationship(
        "Publication", back_populates="author",
        cascade="all, delete-orphan", passive_deletes=True,
    )
