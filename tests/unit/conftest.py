from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.session_tokens import SessionTokenIssuer
from tests.fixtures.fakes import TEST_SECRET, FakeClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update_profile = AsyncMock(return_value=1)
    uow.users.update_password_hash = AsyncMock(return_value=1)
    uow.users.list = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def session_tokens(clock):
    return SessionTokenIssuer(secret=TEST_SECRET, ttl=timedelta(minutes=60), clock=clock)


@pytest.fixture
def reset_tokens(hasher, clock):
    return ResetTokenProtocol(process_secret=TEST_SECRET, hasher=hasher, clock=clock)
