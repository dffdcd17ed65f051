"""
Password Reset Routes

Forgot-password form, reset link verification and new password submission.
These endpoints render HTML pages; failures are returned as JSON errors.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.routes.accounts import parse_account_id
from src.api.utils.payload import read_payload
from src.app.services.mail_dispatcher import MailOutbox
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    ConfirmPasswordResetUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
)
from src.depends import get_mail_outbox, get_reset_token_protocol, get_unit_of_work

router = APIRouter(tags=["Password Reset"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/forgotPassword", response_class=HTMLResponse)
async def forgot_password_view(request: Request):
    """Render the forgot-password form"""
    return templates.TemplateResponse(request, "forgot-password.html", {})


@router.post("/forgotPassword", response_class=HTMLResponse)
async def send_forgot_password_link(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_tokens: ResetTokenProtocol = Depends(get_reset_token_protocol),
    outbox: MailOutbox = Depends(get_mail_outbox),
):
    """
    Request Password Reset

    Mails a reset link valid for 10 minutes. The page is rendered as soon
    as the mail is queued; delivery happens in the background.

    Raises:
        - 400 Bad Request: Missing email
        - 404 Not Found: Unknown email
        - 500 Internal Server Error: Server error
    """
    payload = await read_payload(request)

    use_case = RequestPasswordResetUseCase(
        uow, reset_tokens, outbox, ApplicationConfig.RESET_LINK_BASE_URL
    )
    result = await use_case.execute(payload.get("email"))

    if result.is_err():
        raise_for_error(result.error)

    return templates.TemplateResponse(
        request, "link-send.html", {"message": result.value.message}
    )


@router.get("/password/reset-password/{account_id}/{token}", response_class=HTMLResponse)
async def reset_password_view(
    request: Request,
    account_id: str,
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_tokens: ResetTokenProtocol = Depends(get_reset_token_protocol),
):
    """
    Reset Password Form

    Verifies the link before showing the new-password form.

    Raises:
        - 400 Bad Request: Expired or invalid token
        - 404 Not Found: Unknown account id
    """
    use_case = VerifyResetTokenUseCase(uow, reset_tokens)
    result = await use_case.execute(parse_account_id(account_id), token)

    if result.is_err():
        raise_for_error(result.error)

    return templates.TemplateResponse(
        request,
        "reset-password.html",
        {"email": result.value.email, "account_id": account_id, "token": token},
    )


@router.post("/password/reset-password/{account_id}/{token}", response_class=HTMLResponse)
async def reset_password(
    request: Request,
    account_id: str,
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_tokens: ResetTokenProtocol = Depends(get_reset_token_protocol),
):
    """
    Confirm Password Reset

    Replaces the password. The link stops working once the new password
    is stored.

    Raises:
        - 400 Bad Request: Missing password, expired or invalid token
        - 404 Not Found: Unknown account id
        - 500 Internal Server Error: Server error
    """
    payload = await read_payload(request)

    use_case = ConfirmPasswordResetUseCase(uow, reset_tokens)
    result = await use_case.execute(
        parse_account_id(account_id), token, payload.get("password")
    )

    if result.is_err():
        raise_for_error(result.error)

    return templates.TemplateResponse(
        request, "success-password.html", {"message": result.value.message}
    )
