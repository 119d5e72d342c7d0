"""Domain Types — identity types, edge states, and store records shared across layers.

Invariants:
    - UserId and PublicationId wrap ints — never pass a bare int across a store boundary
    - EdgeState has exactly two members: a follow/like edge is present or absent
    - Records are frozen: stores build them, services read them
    - UserRecord carries no password hash (hash is only reachable via
      UserStore.find_password_hash / find_by_email)

Design Decisions:
    - NewType over wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses over ORM objects: core and services never touch a
      live Session-bound model (ADR: functional core, imperative shell)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
PublicationId = NewType("PublicationId", int)


# ─── Enums ───────────────────────────────────────────────────────

class EdgeState(str, Enum):
    """Presence of one follow/like edge. Toggle flips between the two."""
    ABSENT = "absent"
    PRESENT = "present"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    id: UserId
    name: str
    handle: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Credentials:
    """What login needs: the id and the stored hash for one email."""
    user_id: UserId
    password_hash: str


@dataclass(frozen=True)
class PublicationRecord:
    id: PublicationId
    title: str
    content: str
    author_id: UserId
    created_at: datetime


@dataclass(frozen=True)
class FeedItem:
    """A publication augmented with its like count and author handle."""
    id: PublicationId
    title: str
    content: str
    author_id: UserId
    author_handle: str
    likes: int
    created_at: datetime
