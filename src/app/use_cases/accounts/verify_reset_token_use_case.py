from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResetTokenContext


class VerifyResetTokenUseCase:
    """
    Check a reset link before showing the new-password form.

    Read-only: nothing is written and the token stays usable.
    """

    def __init__(self, uow: UnitOfWork, reset_tokens: ResetTokenProtocol):
        self.uow = uow
        self.reset_tokens = reset_tokens

    async def execute(self, account_id: UUID, token: str) -> Result[ResetTokenContext]:
        async with self.uow:
            user = await self.uow.users.get_by_id(account_id)
            if user is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found"))

            verification = self.reset_tokens.verify(token, account_id, user.password_hash)
            if verification.is_err():
                return Return.err(verification.error)

            return Return.ok(
                ResetTokenContext(account_id=str(user.id), email=user.email)
            )
