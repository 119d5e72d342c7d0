"""Publication Routes — the feed, publication CRUD and likes.

Invariants:
    - Every route depends on current_user_id
    - The author of a new publication is the authenticated user; the body has no author field
    - GET /publications is the caller's feed, not a global listing
"""

from fastapi import APIRouter, Depends, Response, status

from socialgraph.api.dependencies import (
    PublicationIdPath, current_user_id, get_feed_aggregator, get_like_toggle,
    get_publication_service,
)
from socialgraph.core.domain_types import EdgeState, PublicationId, UserId
from socialgraph.schemas.publication import (
    LikeToggleResponse, PublicationResponse, PublicationWrite,
)
from socialgraph.services.feed import FeedAggregator
from socialgraph.services.publications import PublicationService
from socialgraph.services.relationships import LikeToggle

router = APIRouter(prefix="/api/v1/publications", tags=["publications"])


@router.post(
    "", response_model=PublicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_publication(
    body: PublicationWrite,
    actor_id: UserId = Depends(current_user_id),
    publications: PublicationService = Depends(get_publication_service),
):
    item = await publications.create(actor_id, body.title, body.content)
    return PublicationResponse.from_item(item)


@router.get("", response_model=list[PublicationResponse])
async def get_feed(
    actor_id: UserId = Depends(current_user_id),
    feed: FeedAggregator = Depends(get_feed_aggregator),
):
    """Own publications plus those of followed users, newest first."""
    items = await feed.build_feed(actor_id)
    return [PublicationResponse.from_item(i) for i in items]


@router.get("/{publication_id}", response_model=PublicationResponse)
async def get_publication(
    publication_id: PublicationIdPath,
    _: UserId = Depends(current_user_id),
    feed: FeedAggregator = Depends(get_feed_aggregator),
):
    item = await feed.get_publication(PublicationId(publication_id))
    return PublicationResponse.from_item(item)


@router.put("/{publication_id}", response_model=PublicationResponse)
async def update_publication(
    publication_id: PublicationIdPath,
    body: PublicationWrite,
    actor_id: UserId = Depends(current_user_id),
    publications: PublicationService = Depends(get_publication_service),
):
    """Replace title and content. Author only."""
    item = await publications.update(
        actor_id, PublicationId(publication_id), body.title, body.content,
    )
    return PublicationResponse.from_item(item)


@router.delete(
    "/{publication_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_publication(
    publication_id: PublicationIdPath,
    actor_id: UserId = Depends(current_user_id),
    publications: PublicationService = Depends(get_publication_service),
):
    await publications.delete(actor_id, PublicationId(publication_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{publication_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    publication_id: PublicationIdPath,
    actor_id: UserId = Depends(current_user_id),
    likes: LikeToggle = Depends(get_like_toggle),
):
    """Like the publication if not liked yet, unlike otherwise."""
    state, count = await likes.toggle(actor_id, PublicationId(publication_id))
    return LikeToggleResponse(
        publication_id=publication_id,
        liked=state is EdgeState.PRESENT,
        likes=count,
    )
