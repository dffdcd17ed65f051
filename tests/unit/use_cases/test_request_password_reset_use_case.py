from unittest.mock import MagicMock

import pytest

from src.app.use_cases.accounts import RequestPasswordResetUseCase
from src.domain.entities import User
from tests.fixtures.fakes import extract_reset_link

BASE_URL = "http://accounts.test"


@pytest.fixture
def outbox():
    return MagicMock()


@pytest.fixture
def existing_user(hasher):
    return User(
        first_name="A",
        last_name="B",
        email="a@x.com",
        phone="123",
        password_hash=hasher.hash("Secret1!"),
    )


@pytest.mark.asyncio
async def test_reset_link_is_mailed(mock_uow, reset_tokens, outbox, existing_user):
    """Token in the link is bound to the current password hash"""
    # Arrange
    mock_uow.users.get_by_email.return_value = existing_user
    use_case = RequestPasswordResetUseCase(mock_uow, reset_tokens, outbox, BASE_URL)

    # Act
    result = await use_case.execute("a@x.com")

    # Assert
    assert result.is_ok()
    assert result.value.status == "sent"

    outbox.submit.assert_called_once()
    to, subject, html_body = outbox.submit.call_args.args
    assert to == "a@x.com"
    assert subject == "Reset Password"
    assert f"{BASE_URL}/password/reset-password/{existing_user.id}/" in html_body

    account_id, token = extract_reset_link(html_body)
    assert account_id == str(existing_user.id)
    verification = reset_tokens.verify(token, existing_user.id, existing_user.password_hash)
    assert verification.is_ok()


@pytest.mark.asyncio
async def test_nothing_is_written(mock_uow, reset_tokens, outbox, existing_user):
    mock_uow.users.get_by_email.return_value = existing_user
    use_case = RequestPasswordResetUseCase(mock_uow, reset_tokens, outbox, BASE_URL)

    await use_case.execute("a@x.com")

    mock_uow.users.update_password_hash.assert_not_called()
    mock_uow.users.update_profile.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email(mock_uow, reset_tokens, outbox):
    mock_uow.users.get_by_email.return_value = None
    use_case = RequestPasswordResetUseCase(mock_uow, reset_tokens, outbox, BASE_URL)

    result = await use_case.execute("nobody@x.com")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_NOT_FOUND"
    outbox.submit.assert_not_called()


@pytest.mark.asyncio
async def test_missing_email(mock_uow, reset_tokens, outbox):
    use_case = RequestPasswordResetUseCase(mock_uow, reset_tokens, outbox, BASE_URL)

    result = await use_case.execute(None)

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.users.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_mail_submission_does_not_wait_for_delivery(mock_uow, reset_tokens, existing_user):
    """Use case returns even if the dispatcher would fail later"""
    from src.app.services.mail_dispatcher import MailOutbox
    from tests.fixtures.fakes import RecordingMailDispatcher

    mock_uow.users.get_by_email.return_value = existing_user
    outbox = MailOutbox(RecordingMailDispatcher(fail=True))
    use_case = RequestPasswordResetUseCase(mock_uow, reset_tokens, outbox, BASE_URL)

    result = await use_case.execute("a@x.com")
    await outbox.drain()

    assert result.is_ok()
