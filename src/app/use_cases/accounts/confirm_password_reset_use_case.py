"""
Confirm Password Reset Use Case

Verifies the reset token against the stored password hash and replaces
the password.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.password_hasher import HashingError
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ConfirmPasswordResetResponse
from .validation import validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password is required (bcrypt limit of 72 bytes)
    - Account is re-read so the token is checked against the current hash
    - Token is verified before the new password is hashed
    - Writing the new hash is what retires the token: once it lands, the
      derived secret changes and the same link fails as RESET_TOKEN_INVALID
    - Two confirmations racing the same write may both pass verification;
      the store write is the only consumption signal
    """

    def __init__(self, uow: UnitOfWork, reset_tokens: ResetTokenProtocol):
        self.uow = uow
        self.reset_tokens = reset_tokens

    async def execute(
        self, account_id: UUID, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            account_id: Account id from the reset link
            token: Reset token from the reset link
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - VALIDATION_ERROR: Password missing or too long
            - ACCOUNT_NOT_FOUND: No account with this id
            - RESET_TOKEN_EXPIRED: Token window elapsed
            - RESET_TOKEN_INVALID: Tampered token or password already changed
            - HASHING_ERROR: Hashing backend failure
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(account_id)
            if user is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found"))

            try:
                reset = await self.reset_tokens.complete_reset(
                    account_id, token, user.password_hash, new_password
                )
            except HashingError:
                logger.exception("Password hashing failed during password reset")
                return Return.err(Error("HASHING_ERROR", "Unable to process password"))

            if reset.is_err():
                return Return.err(reset.error)

            affected = await self.uow.users.update_password_hash(account_id, reset.value)
            if affected == 0:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found"))

            await self.uow.commit()

        logger.info(f"Password reset completed for account {account_id}")

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
