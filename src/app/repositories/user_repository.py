from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised by create/update when the email is already taken"""


class StoreTimeoutError(Exception):
    """Raised when a store round-trip exceeds the configured bound"""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Account store did not respond within {timeout}s")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user, DuplicateEmailError if the email is taken"""
        pass

    @abstractmethod
    async def update_profile(
        self, user_id: UUID, first_name: str, last_name: str, email: str, phone: str
    ) -> int:
        """Overwrite profile fields, returns the number of rows matched"""
        pass

    @abstractmethod
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> int:
        """Replace the stored password hash, returns the number of rows matched"""
        pass

    @abstractmethod
    async def list(self, limit: int, offset: int) -> List[User]:
        """List users ordered by creation time"""
        pass
