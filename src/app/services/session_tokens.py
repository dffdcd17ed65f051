"""
Session Token Issuer

Mints the bearer token handed out at login and registration.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from .token_codec import (
    Clock,
    TokenExpiredError,
    TokenInvalidError,
    decode_token,
    encode_token,
    utc_now,
)

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token"""

    account_id: UUID
    email: str


def claims_from_payload(payload: dict) -> TokenClaims:
    try:
        return TokenClaims(account_id=UUID(payload["sub"]), email=payload["email"])
    except (KeyError, TypeError, ValueError) as exc:
        raise TokenInvalidError("Token claims are incomplete") from exc


class SessionTokenIssuer:
    """
    Stateless session tokens.

    Business Rules:
    - HS256 signed with a single process-wide secret
    - Fixed lifetime, no server-side record and no revocation
    - Expired and invalid tokens are reported with distinct codes
    """

    def __init__(self, secret: str, ttl: timedelta, clock: Optional[Clock] = None):
        self.secret = secret
        self.ttl = ttl
        self.clock = clock or utc_now

    def issue(self, account_id: UUID, email: str) -> str:
        claims = {"sub": str(account_id), "email": email, "type": SESSION_TOKEN_TYPE}
        return encode_token(claims, self.secret, self.ttl, self.clock())

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Verify a session token.

        Returns:
            Result with TokenClaims, or Error TOKEN_EXPIRED / TOKEN_INVALID
        """
        try:
            payload = decode_token(token, self.secret, SESSION_TOKEN_TYPE, self.clock())
            return Return.ok(claims_from_payload(payload))
        except TokenExpiredError:
            logger.info("Rejected expired session token")
            return Return.err(Error("TOKEN_EXPIRED", "Session token has expired"))
        except TokenInvalidError as exc:
            logger.warning(f"Rejected invalid session token: {exc}")
            return Return.err(Error("TOKEN_INVALID", "Session token is invalid"))
