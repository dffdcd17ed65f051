import bcrypt
import pytest
from unittest.mock import patch

from src.app.services.password_hasher import HashingError, PasswordHasher


def test_hash_verifies_against_original_password(hasher):
    password_hash = hasher.hash("Secret1!")

    assert password_hash != "Secret1!"
    assert hasher.verify("Secret1!", password_hash) is True


def test_wrong_password_does_not_verify(hasher):
    password_hash = hasher.hash("Secret1!")

    assert hasher.verify("Secret2!", password_hash) is False
    assert hasher.verify("", password_hash) is False


def test_same_password_hashes_differently_each_time(hasher):
    """Fresh salt per call"""
    first = hasher.hash("Secret1!")
    second = hasher.hash("Secret1!")

    assert first != second
    assert hasher.verify("Secret1!", first)
    assert hasher.verify("Secret1!", second)


def test_hash_uses_configured_work_factor():
    hasher = PasswordHasher(rounds=5)

    password_hash = hasher.hash("Secret1!")

    assert password_hash.startswith("$2b$05$")
    assert len(password_hash) == 60


def test_verify_returns_false_for_garbage_hash(hasher):
    assert hasher.verify("Secret1!", "not-a-bcrypt-hash") is False


def test_backend_failure_raises_hashing_error(hasher):
    with patch("src.app.services.password_hasher.bcrypt.gensalt", side_effect=ValueError("no entropy")):
        with pytest.raises(HashingError):
            hasher.hash("Secret1!")


@pytest.mark.asyncio
async def test_async_variants_match_sync_behaviour(hasher):
    password_hash = await hasher.hash_async("Secret1!")

    assert await hasher.verify_async("Secret1!", password_hash) is True
    assert await hasher.verify_async("nope", password_hash) is False
    assert bcrypt.checkpw(b"Secret1!", password_hash.encode())


@pytest.mark.asyncio
async def test_dummy_verification_never_raises(hasher):
    await hasher.verify_dummy_async("anything")
    await hasher.verify_dummy_async("x" * 200)
