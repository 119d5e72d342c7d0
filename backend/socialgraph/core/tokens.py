"""Token Issuer & Validator — stateless signed bearer tokens (JWT via python-jose).

Invariants:
    - Claims are exactly: userId (str), authorized (True), iat (int), exp (int)
    - exp = iat + ttl; validity depends only on signature and exp (no revocation list)
    - Validator rejects any token whose header alg differs from TokenConfig.algorithm
      BEFORE verifying the signature (blocks "none" and alg-confusion tokens)
    - Subject is read only after signature and expiry checks pass
    - Every failure is an AuthenticationError; reason distinguishes missing,
      malformed, expired, invalid_signature for logs only

Design Decisions:
    - TokenConfig is a frozen value built once by the shell: no global secret
    - Expiry checked against an injectable clock (jose's own exp check disabled)
      so tests can validate "7 hours later" without sleeping
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import jwt
from jose.exceptions import JWTError

from socialgraph.core.domain_types import UserId
from socialgraph.core.errors import (
    AuthenticationError, AuthFailureReason, InternalError,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenConfig:
    """Signing secret, algorithm and TTL — read-only after startup."""
    secret: str
    ttl: timedelta = timedelta(hours=6)
    algorithm: str = "HS256"

    def __repr__(self) -> str:
        return f"TokenConfig(ttl={self.ttl!r}, algorithm={self.algorithm!r})"


class TokenIssuer:
    """Issues signed tokens for authenticated users."""

    def __init__(self, config: TokenConfig, clock: Clock = utc_now):
        self._config = config
        self._clock = clock

    def issue(self, user_id: UserId) -> str:
        issued_at = self._clock()
        claims = {
            "authorized": True,
            "userId": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._config.ttl).timestamp()),
        }
        try:
            return jwt.encode(
                claims, self._config.secret, algorithm=self._config.algorithm,
            )
        except JWTError as e:
            raise InternalError(f"Token signing failed: {type(e).__name__}")


class TokenValidator:
    """Validates tokens produced by TokenIssuer with the same config."""

    def __init__(self, config: TokenConfig, clock: Clock = utc_now):
        self._config = config
        self._clock = clock

    def validate(self, token: str | None) -> UserId:
        if not token:
            raise AuthenticationError(AuthFailureReason.MISSING)

        try:
            header = jwt.get_unverified_header(token)
        except JWTError:
            raise AuthenticationError(AuthFailureReason.MALFORMED)
        if header.get("alg") != self._config.algorithm:
            raise AuthenticationError(AuthFailureReason.MALFORMED)

        try:
            claims = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise AuthenticationError(AuthFailureReason.INVALID_SIGNATURE)

        exp = claims.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise AuthenticationError(AuthFailureReason.MALFORMED)
        if self._clock().timestamp() >= exp:
            raise AuthenticationError(AuthFailureReason.EXPIRED)

        return _extract_subject(claims)


def _extract_subject(claims: dict) -> UserId:
    """Read userId from already-verified claims."""
    if claims.get("authorized") is not True:
        raise AuthenticationError(AuthFailureReason.MALFORMED)
    raw = claims.get("userId")
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        raise AuthenticationError(AuthFailureReason.MALFORMED)
    return UserId(int(raw))
