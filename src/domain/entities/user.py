"""
User Entity

Represents one registered account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - one registered account.

    Business Rules:
    - Email must be unique across all users (exact-match comparison)
    - Password stored as bcrypt hash, never returned by the API
    - The current password_hash is also part of the password reset
      signing secret, so changing it invalidates outstanding reset links
    - is_admin defaults to False when not supplied at registration
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: str = Field(max_length=32)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_admin: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
