"""Publication Schemas — request/response models for the publications API.

Invariants:
    - title (1-50) and content (1-300) are stripped; empty after stripping is a 400
    - Request bodies carry no author field: the author is the authenticated user
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from socialgraph.core.domain_types import FeedItem


class PublicationWrite(BaseModel):
    """Create and update payload."""
    title: str = Field(min_length=1, max_length=50)
    content: str = Field(min_length=1, max_length=300)

    @field_validator("title", "content")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class PublicationResponse(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    author_handle: str
    likes: int
    created_at: datetime

    @classmethod
    def from_item(cls, item: FeedItem) -> "PublicationResponse":
        return cls(
            id=item.id,
            title=item.title,
            content=item.content,
            author_id=item.author_id,
            author_handle=item.author_handle,
            likes=item.likes,
            created_at=item.created_at,
        )


class LikeToggleResponse(BaseModel):
    publication_id: int
    liked: bool
    likes: int
