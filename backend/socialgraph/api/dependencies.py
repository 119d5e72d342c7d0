"""Dependencies — configuration values, the authentication guard chain, and service wiring.

Invariants:
    - TokenConfig and CredentialVerifier are built once per process from settings
      (lru_cache) and injected; nothing below this module reads settings
    - Guard chain is explicit and ordered: Authorization header -> bearer_token
      -> current_user_id. A route is protected iff it depends on current_user_id
    - current_user_id is passed to handlers as a parameter, never stored globally

Design Decisions:
    - Dependency chain over middleware: FastAPI resolves it per route, and each
      link can be overridden in tests (app.dependency_overrides)
    - Stores are constructed per request around that request's AsyncSession
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Path
from sqlalchemy.ext.asyncio import AsyncSession

from socialgraph.config import get_settings
from socialgraph.core.authorization import extract_bearer_token
from socialgraph.core.credentials import CredentialVerifier
from socialgraph.core.domain_types import UserId
from socialgraph.core.tokens import TokenConfig, TokenIssuer, TokenValidator
from socialgraph.infrastructure.database import get_db
from socialgraph.services.accounts import AccountService
from socialgraph.services.feed import FeedAggregator
from socialgraph.services.publications import PublicationService
from socialgraph.services.relationships import LikeToggle, RelationshipToggle
from socialgraph.stores.follows import SqlFollowStore
from socialgraph.stores.likes import SqlLikeStore
from socialgraph.stores.publications import SqlPublicationStore
from socialgraph.stores.users import SqlUserStore


# ─── Configuration values ───────────────────────────────────────

@lru_cache
def get_token_config() -> TokenConfig:
    settings = get_settings()
    return TokenConfig(
        secret=settings.secret_key.get_secret_value(),
        ttl=timedelta(hours=settings.token_ttl_hours),
        algorithm=settings.jwt_algorithm,
    )


@lru_cache
def get_credential_verifier() -> CredentialVerifier:
    return CredentialVerifier(rounds=get_settings().bcrypt_rounds)


def get_token_issuer(
    config: TokenConfig = Depends(get_token_config),
) -> TokenIssuer:
    return TokenIssuer(config)


def get_token_validator(
    config: TokenConfig = Depends(get_token_config),
) -> TokenValidator:
    return TokenValidator(config)


# ─── Path parameters ────────────────────────────────────────────

# Ids are int4 columns; anything outside that range is a 400, never a driver error.
MAX_ROW_ID = 2**31 - 1
UserIdPath = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
PublicationIdPath = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


# ─── Guard chain ────────────────────────────────────────────────

def bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Guard 1: the Authorization header must carry a Bearer token."""
    return extract_bearer_token(authorization)


def current_user_id(
    token: str = Depends(bearer_token),
    validator: TokenValidator = Depends(get_token_validator),
) -> UserId:
    """Guard 2: the token must validate; yields the authenticated user id."""
    return validator.validate(token)


# ─── Services ───────────────────────────────────────────────────

def get_account_service(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(SqlUserStore(db), credentials, issuer)


def get_feed_aggregator(db: AsyncSession = Depends(get_db)) -> FeedAggregator:
    return FeedAggregator(
        SqlPublicationStore(db), SqlLikeStore(db), SqlUserStore(db),
    )


def get_publication_service(
    db: AsyncSession = Depends(get_db),
    feed: FeedAggregator = Depends(get_feed_aggregator),
) -> PublicationService:
    return PublicationService(SqlPublicationStore(db), feed)


def get_relationship_toggle(
    db: AsyncSession = Depends(get_db),
) -> RelationshipToggle:
    return RelationshipToggle(SqlFollowStore(db), SqlUserStore(db))


def get_like_toggle(db: AsyncSession = Depends(get_db)) -> LikeToggle:
    return LikeToggle(SqlLikeStore(db))
