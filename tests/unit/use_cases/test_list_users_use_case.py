import pytest

from src.app.use_cases.accounts import ListUsersUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_defaults_to_first_page_of_ten(mock_uow):
    use_case = ListUsersUseCase(mock_uow)

    result = await use_case.execute()

    assert result.is_ok()
    assert result.value.limit == 10
    assert result.value.page == 1
    mock_uow.users.list.assert_called_once_with(limit=10, offset=0)


@pytest.mark.asyncio
async def test_offset_follows_page(mock_uow):
    use_case = ListUsersUseCase(mock_uow)

    await use_case.execute(limit=5, page=3)

    mock_uow.users.list.assert_called_once_with(limit=5, offset=10)


@pytest.mark.asyncio
@pytest.mark.parametrize("limit,page", [(0, 0), (-1, -4)])
async def test_non_positive_values_fall_back_to_defaults(mock_uow, limit, page):
    use_case = ListUsersUseCase(mock_uow)

    result = await use_case.execute(limit=limit, page=page)

    assert (result.value.limit, result.value.page) == (10, 1)


@pytest.mark.asyncio
async def test_limit_is_capped(mock_uow):
    use_case = ListUsersUseCase(mock_uow)

    result = await use_case.execute(limit=5000)

    assert result.value.limit == 100


@pytest.mark.asyncio
async def test_password_hash_is_not_listed(mock_uow):
    mock_uow.users.list.return_value = [
        User(first_name="A", last_name="B", email="a@x.com", phone="123", password_hash="secret-hash")
    ]
    use_case = ListUsersUseCase(mock_uow)

    result = await use_case.execute()

    dumped = result.value.model_dump(by_alias=True)
    assert dumped["users"][0]["email"] == "a@x.com"
    assert "secret-hash" not in str(dumped)
