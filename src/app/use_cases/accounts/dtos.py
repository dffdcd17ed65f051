"""
Account Use Case DTOs (Data Transfer Objects)

Command and Response classes for the account domain.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(CamelModel):
    """
    Register command - raw registration intent.

    Fields are optional on purpose: missing values are reported by the
    use case as VALIDATION_ERROR rather than rejected by the HTTP layer.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    is_admin: bool = False


class UpdateProfileCommand(CamelModel):
    """Profile fields to overwrite"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisteredUser(CamelModel):
    """User information in registration response"""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    token: str


class RegisterResponse(CamelModel):
    """Response for register use case"""

    user: RegisteredUser


class LoginResponse(CamelModel):
    """Response for login use case"""

    token: str


class UpdateProfileResponse(CamelModel):
    """Response for update profile use case"""

    message: str


class UserSummary(CamelModel):
    """Public fields of one user in a listing"""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str


class ListUsersResponse(CamelModel):
    """Response for list users use case"""

    users: List[UserSummary]
    limit: int
    page: int


class RequestPasswordResetResponse(CamelModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ResetTokenContext(CamelModel):
    """Account a verified reset token belongs to"""

    account_id: str
    email: str


class ConfirmPasswordResetResponse(CamelModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
