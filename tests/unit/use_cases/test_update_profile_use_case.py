from uuid import uuid4

import pytest

from src.app.repositories.user_repository import DuplicateEmailError
from src.app.use_cases.accounts import UpdateProfileCommand, UpdateProfileUseCase
from src.domain.entities import User


def make_user(**overrides) -> User:
    fields = {
        "first_name": "A",
        "last_name": "B",
        "email": "a@x.com",
        "phone": "123",
        "password_hash": "hash",
    }
    fields.update(overrides)
    return User(**fields)


def make_command(**overrides) -> UpdateProfileCommand:
    fields = {"first_name": "Ada", "last_name": "Lovelace", "email": "a@x.com", "phone": "555"}
    fields.update(overrides)
    return UpdateProfileCommand(**fields)


@pytest.mark.asyncio
async def test_successful_update(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(user.id, make_command())

    assert result.is_ok()
    assert result.value.message == "The user has been updated successfully"
    mock_uow.users.update_profile.assert_called_once_with(
        user.id, first_name="Ada", last_name="Lovelace", email="a@x.com", phone="555"
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_repeating_update_gives_same_outcome(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    use_case = UpdateProfileUseCase(mock_uow)

    first = await use_case.execute(user.id, make_command())
    second = await use_case.execute(user.id, make_command())

    assert first.is_ok() and second.is_ok()
    assert first.value == second.value


@pytest.mark.asyncio
async def test_missing_field(mock_uow):
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(uuid4(), make_command(phone=None))

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_account(mock_uow):
    account_id = uuid4()
    mock_uow.users.get_by_id.return_value = None
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(account_id, make_command())

    assert result.error.code == "ACCOUNT_NOT_FOUND"
    assert str(account_id) in result.error.message
    mock_uow.users.update_profile.assert_not_called()


@pytest.mark.asyncio
async def test_row_vanished_before_update(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.update_profile.return_value = 0
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(user.id, make_command())

    assert result.error.code == "ACCOUNT_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_email_taken_by_another_account(mock_uow):
    user = make_user()
    other = make_user(email="taken@x.com")
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.get_by_email.return_value = other
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(user.id, make_command(email="taken@x.com"))

    assert result.error.code == "DUPLICATE_ACCOUNT"
    mock_uow.users.update_profile.assert_not_called()


@pytest.mark.asyncio
async def test_email_conflict_detected_on_write(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.update_profile.side_effect = DuplicateEmailError("new@x.com")
    use_case = UpdateProfileUseCase(mock_uow)

    result = await use_case.execute(user.id, make_command(email="new@x.com"))

    assert result.error.code == "DUPLICATE_ACCOUNT"
