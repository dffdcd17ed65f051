"""
Password Hasher

One-way salted hashing of account passwords with bcrypt.
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class HashingError(Exception):
    """The hashing backend failed to produce a hash"""


class PasswordHasher:
    """
    bcrypt password hasher.

    Every call to hash() draws a fresh salt, so hashing the same plaintext
    twice yields two different strings that both verify. The work factor is
    fixed per instance (cost factor 12 in production).

    The *_async variants run bcrypt on a worker thread so that the event loop
    keeps serving other requests while a hash is computed.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, plaintext: str) -> str:
        try:
            salt = bcrypt.gensalt(self.rounds)
            return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError, OSError) as exc:
            raise HashingError("Unable to hash password") from exc

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Unparsable stored hash or oversized input never matches
            logger.warning("Password verification received an unusable hash or input")
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, password_hash)

    async def verify_dummy_async(self, plaintext: str) -> None:
        """
        Spend one verification against a throwaway hash.

        Login calls this when the email is unknown so that a miss costs the
        same as a wrong password.
        """
        await asyncio.to_thread(
            bcrypt.checkpw, plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES], self._dummy_hash
        )
