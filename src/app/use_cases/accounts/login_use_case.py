"""
Login Use Case

Checks credentials and issues a session token.
"""

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_tokens import SessionTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LoginResponse
from .validation import require_fields


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Email and password are required
    - Unknown email -> ACCOUNT_NOT_FOUND, wrong password -> INVALID_CREDENTIALS
    - A bcrypt verification runs in both failure paths so that response
      time does not reveal whether the email exists
    - Session token asserts {account id, email}
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        session_tokens: SessionTokenIssuer,
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_tokens = session_tokens

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the session token, or Error
        """
        required = require_fields({"email": email, "password": password})
        if required.is_err():
            return Return.err(
                Error("VALIDATION_ERROR", "Email and password are required")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await self.hasher.verify_dummy_async(password)
                return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found"))

            password_valid = await self.hasher.verify_async(password, user.password_hash)
            if not password_valid:
                return Return.err(
                    Error(
                        "INVALID_CREDENTIALS",
                        "Email or password is incorrect. Please try again.",
                    )
                )

            token = self.session_tokens.issue(user.id, user.email)
            return Return.ok(LoginResponse(token=token))
