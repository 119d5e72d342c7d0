"""Edge Toggle Rules — state machine and input checks for follow/like toggles.

Invariants:
    - Two states, one transition: ABSENT -> PRESENT, PRESENT -> ABSENT
    - There is no "set" or "update" transition
    - Self-follow is rejected regardless of the current edge state
    - Likes have no self-reference restriction

Design Decisions:
    - The state machine is pure; the store performs the transition atomically
      and reports which state it landed in
"""

from socialgraph.core.domain_types import EdgeState, UserId
from socialgraph.core.errors import ValidationError


def toggled(state: EdgeState) -> EdgeState:
    """The only transition an edge has."""
    if state is EdgeState.PRESENT:
        return EdgeState.ABSENT
    return EdgeState.PRESENT


def validate_follow_pair(follower_id: UserId, followed_id: UserId) -> None:
    if follower_id == followed_id:
        raise ValidationError(
            "You cannot follow or unfollow yourself", field="user_id",
        )
