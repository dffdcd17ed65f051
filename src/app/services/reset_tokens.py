"""
Password Reset Token Protocol

Reset tokens are never stored. Each one is signed with a secret derived from
the process secret and the account's password hash at the moment of issue,
so any later password change makes every outstanding reset token fail
signature verification.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from .password_hasher import PasswordHasher
from .session_tokens import TokenClaims, claims_from_payload
from .token_codec import (
    Clock,
    TokenExpiredError,
    TokenInvalidError,
    decode_token,
    encode_token,
    utc_now,
)

logger = logging.getLogger(__name__)

RESET_TOKEN_TYPE = "reset"
RESET_TOKEN_TTL = timedelta(minutes=10)


def derive_secret(process_secret: str, password_hash: str) -> str:
    """
    Per-account, per-password signing secret.

    Pure: the same inputs always give the same secret, a different
    password hash gives a different one.
    """
    return process_secret + password_hash


class ResetTokenProtocol:
    """
    Issues and verifies time-boxed password reset tokens.

    Business Rules:
    - Token asserts {account_id, email}, expires 10 minutes after issue
    - Signing secret = derive_secret(process secret, current password hash)
    - Verification always re-derives the secret from the hash the caller
      just read from the store
    - Tampered tokens and tokens minted before a password change fail the
      same way (RESET_TOKEN_INVALID)
    - There is no "used" marker: a token stops verifying once the password
      it was bound to is replaced
    """

    def __init__(
        self,
        process_secret: str,
        hasher: PasswordHasher,
        ttl: timedelta = RESET_TOKEN_TTL,
        clock: Optional[Clock] = None,
    ):
        self.process_secret = process_secret
        self.hasher = hasher
        self.ttl = ttl
        self.clock = clock or utc_now

    def issue(self, account_id: UUID, email: str, password_hash: str) -> str:
        secret = derive_secret(self.process_secret, password_hash)
        claims = {"sub": str(account_id), "email": email, "type": RESET_TOKEN_TYPE}
        return encode_token(claims, secret, self.ttl, self.clock())

    def verify(
        self, token: str, account_id: UUID, current_password_hash: str
    ) -> Result[TokenClaims]:
        """
        Verify a reset token against the account's current password hash.

        Args:
            token: Reset token from the emailed link
            account_id: Account id from the link
            current_password_hash: Hash freshly read from the store

        Returns:
            Result with TokenClaims, or Error RESET_TOKEN_EXPIRED / RESET_TOKEN_INVALID
        """
        secret = derive_secret(self.process_secret, current_password_hash)
        try:
            payload = decode_token(token, secret, RESET_TOKEN_TYPE, self.clock())
            claims = claims_from_payload(payload)
        except TokenExpiredError:
            logger.info(f"Expired password reset token for account {account_id}")
            return Return.err(
                Error("RESET_TOKEN_EXPIRED", "Password reset token has expired")
            )
        except TokenInvalidError:
            logger.warning(f"Invalid password reset token for account {account_id}")
            return Return.err(
                Error("RESET_TOKEN_INVALID", "Invalid or expired password reset token")
            )

        if claims.account_id != account_id:
            logger.warning(f"Password reset token does not belong to account {account_id}")
            return Return.err(
                Error("RESET_TOKEN_INVALID", "Invalid or expired password reset token")
            )

        return Return.ok(claims)

    async def complete_reset(
        self,
        account_id: UUID,
        token: str,
        current_password_hash: str,
        new_password: str,
    ) -> Result[str]:
        """
        Verify the token, then hash the new password.

        Hashing is only attempted once the token has verified. The caller
        persists the returned hash; that write is what retires the token.

        Returns:
            Result with the new password hash, or the verification Error
        """
        verification = self.verify(token, account_id, current_password_hash)
        if verification.is_err():
            return Return.err(verification.error)

        new_password_hash = await self.hasher.hash_async(new_password)
        return Return.ok(new_password_hash)
