"""
Request Password Reset Use Case

Issues a stateless reset token and mails the reset link.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.mail_dispatcher import MailOutbox
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RequestPasswordResetResponse
from .validation import is_blank

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Reset Password"


def build_reset_link(base_url: str, account_id: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/password/reset-password/{account_id}/{token}"


def render_reset_email(link: str) -> str:
    return (
        "<div>"
        "<h4>Click on the link below to reset your password</h4>"
        f'<p><a href="{link}">{link}</a></p>'
        "</div>"
    )


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Unknown email -> ACCOUNT_NOT_FOUND
    - Token is bound to the account's current password hash, expires in
      10 minutes and is not persisted anywhere
    - Several requests in a row each produce a usable token until the
      password changes
    - The email is handed to the outbox and sent in the background;
      delivery failures are logged and do not fail the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_tokens: ResetTokenProtocol,
        outbox: MailOutbox,
        reset_link_base_url: str,
    ):
        self.uow = uow
        self.reset_tokens = reset_tokens
        self.outbox = outbox
        self.reset_link_base_url = reset_link_base_url

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status, or Error
        """
        if is_blank(email):
            return Return.err(Error("VALIDATION_ERROR", "Email is required"))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found"))

            token = self.reset_tokens.issue(user.id, user.email, user.password_hash)
            link = build_reset_link(self.reset_link_base_url, str(user.id), token)

            self.outbox.submit(user.email, RESET_EMAIL_SUBJECT, render_reset_email(link))
            logger.info(f"Password reset link queued for account {user.id}")

        return Return.ok(
            RequestPasswordResetResponse(
                status="sent",
                message="A password reset link has been sent to your email",
            )
        )
