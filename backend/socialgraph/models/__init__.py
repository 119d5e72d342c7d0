"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; publications and edges cascade from it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from socialgraph.models.user import User  # noqa: F401
from socialgraph.models.publication import Publication  # noqa: F401
from socialgraph.models.follow_edge import FollowEdge  # noqa: F401
from socialgraph.models.like_edge import LikeEdge  # noqa: F401
