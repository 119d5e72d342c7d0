"""Authorization Checks — bearer extraction and fixed ownership rule. Pure, no IO.

Invariants:
    - extract_bearer_token raises AuthenticationError(MISSING) for an absent/empty header
      and AuthenticationError(MALFORMED) for any scheme other than Bearer
    - ensure_owner compares the STORED owner id to the authenticated id;
      callers must never pass a client-supplied owner field
    - Ownership failure is AuthorizationError (403), never AuthenticationError (401)

Design Decisions:
    - Not a policy engine: the only rule is "a user mutates only their own resources"
"""

from socialgraph.core.domain_types import UserId
from socialgraph.core.errors import (
    AuthenticationError, AuthFailureReason, AuthorizationError,
)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization or not authorization.strip():
        raise AuthenticationError(AuthFailureReason.MISSING)
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise AuthenticationError(AuthFailureReason.MALFORMED)
    return parts[1]


def ensure_owner(
    owner_id: UserId, user_id: UserId, resource_type: str, resource_id: int,
) -> None:
    """Raise AuthorizationError unless user_id owns the resource."""
    if owner_id != user_id:
        raise AuthorizationError(resource_type, str(resource_id))
