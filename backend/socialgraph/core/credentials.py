"""Credential Verifier — salted, adaptive-cost password hashing with bcrypt.

Invariants:
    - hash_password never returns the same string twice for the same password (fresh salt)
    - verify_password compares in constant time (bcrypt.checkpw)
    - Neither the plaintext nor the hash is ever logged or put into an error message
    - Passwords longer than 72 bytes are refused at hash time and never match at verify time

Design Decisions:
    - Cost factor injected by the shell (settings.bcrypt_rounds): tests run with 4
    - burn_verification exists so login with an unknown email costs one bcrypt
      check, same as a wrong password (no timing oracle for registered emails)
"""

import logging
import secrets
from functools import cached_property

import bcrypt

from socialgraph.core.errors import CredentialMismatchError, ValidationError

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


class CredentialVerifier:
    """One-way password hashing and verification."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if not encoded:
            raise ValidationError("Password is required", field="password")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                field="password",
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(self.rounds)).decode("ascii")

    def verify_password(self, password: str, password_hash: str) -> None:
        """Return None on match, raise CredentialMismatchError otherwise."""
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise CredentialMismatchError()
        try:
            matched = bcrypt.checkpw(encoded, password_hash.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            logger.warning("Stored password hash is not a valid bcrypt hash")
            matched = False
        if not matched:
            raise CredentialMismatchError()

    def burn_verification(self, password: str) -> None:
        """Spend the cost of one verification against a throwaway hash."""
        encoded = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash.encode("ascii"))

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash_password(secrets.token_urlsafe(32))
