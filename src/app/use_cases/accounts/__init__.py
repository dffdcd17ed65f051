"""
Account Use Cases

Registration, login, profile and password reset business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .list_users_use_case import ListUsersUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    RegisterCommand,
    UpdateProfileCommand,
    RegisterResponse,
    RegisteredUser,
    LoginResponse,
    UpdateProfileResponse,
    ListUsersResponse,
    UserSummary,
    RequestPasswordResetResponse,
    ResetTokenContext,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "UpdateProfileUseCase",
    "ListUsersUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "UpdateProfileCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "UpdateProfileResponse",
    "ListUsersResponse",
    "RequestPasswordResetResponse",
    "ResetTokenContext",
    "ConfirmPasswordResetResponse",
    # DTOs - Nested Models
    "RegisteredUser",
    "UserSummary",
]
