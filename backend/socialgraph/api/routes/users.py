"""User Routes — registration, profiles, password changes and the follow graph.

Invariants:
    - Only POST /users is public; everything else depends on current_user_id
    - Profile mutations pass both the path id and the authenticated id to the
      service, which enforces ownership
    - Responses never contain password material (UserResponse has no such field)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from socialgraph.api.dependencies import (
    UserIdPath, current_user_id, get_account_service, get_feed_aggregator,
    get_relationship_toggle,
)
from socialgraph.core.domain_types import EdgeState, UserId
from socialgraph.schemas.publication import PublicationResponse
from socialgraph.schemas.user import (
    FollowToggleResponse, PasswordChange, UserCreate, UserResponse, UserUpdate,
)
from socialgraph.services.accounts import AccountService
from socialgraph.services.feed import FeedAggregator
from socialgraph.services.relationships import RelationshipToggle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    accounts: AccountService = Depends(get_account_service),
):
    """Register a new account."""
    user = await accounts.register(
        body.name, body.handle, body.email, body.password,
    )
    return UserResponse.from_record(user)


@router.get("", response_model=list[UserResponse])
async def search_users(
    q: str = Query(default="", max_length=50),
    _: UserId = Depends(current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    """Case-insensitive substring search over name and handle."""
    users = await accounts.search(q.strip())
    return [UserResponse.from_record(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UserIdPath,
    _: UserId = Depends(current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    return UserResponse.from_record(await accounts.get(UserId(user_id)))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UserIdPath,
    body: UserUpdate,
    actor_id: UserId = Depends(current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    """Update name, handle and email. Owner only."""
    user = await accounts.update_profile(
        actor_id, UserId(user_id), body.name, body.handle, body.email,
    )
    return UserResponse.from_record(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UserIdPath,
    actor_id: UserId = Depends(current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    """Delete the account with its publications, likes and follow edges."""
    await accounts.delete_account(actor_id, UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    user_id: UserIdPath,
    body: PasswordChange,
    actor_id: UserId = Depends(current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.change_password(
        actor_id, UserId(user_id), body.current, body.new,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/follow", response_model=FollowToggleResponse)
async def toggle_follow(
    user_id: UserIdPath,
    actor_id: UserId = Depends(current_user_id),
    relationships: RelationshipToggle = Depends(get_relationship_toggle),
):
    """Follow the user if not followed yet, unfollow otherwise."""
    state = await relationships.toggle(actor_id, UserId(user_id))
    return FollowToggleResponse(
        user_id=user_id, following=state is EdgeState.PRESENT,
    )


@router.get("/{user_id}/followers", response_model=list[UserResponse])
async def list_followers(
    user_id: UserIdPath,
    _: UserId = Depends(current_user_id),
    relationships: RelationshipToggle = Depends(get_relationship_toggle),
):
    users = await relationships.followers(UserId(user_id))
    return [UserResponse.from_record(u) for u in users]


@router.get("/{user_id}/following", response_model=list[UserResponse])
async def list_following(
    user_id: UserIdPath,
    _: UserId = Depends(current_user_id),
    relationships: RelationshipToggle = Depends(get_relationship_toggle),
):
    users = await relationships.following(UserId(user_id))
    return [UserResponse.from_record(u) for u in users]


@router.get(
    "/{user_id}/publications", response_model=list[PublicationResponse],
)
async def list_user_publications(
    user_id: UserIdPath,
    _: UserId = Depends(current_user_id),
    feed: FeedAggregator = Depends(get_feed_aggregator),
):
    """Publications authored by one user, newest first."""
    items = await feed.publications_by(UserId(user_id))
    return [PublicationResponse.from_item(i) for i in items]
