"""
Use Cases

Organized by area:
- accounts/: Registration, login, profile, listing and password reset
"""

from .accounts import (
    ConfirmPasswordResetUseCase,
    ListUsersUseCase,
    LoginUseCase,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    UpdateProfileUseCase,
    VerifyResetTokenUseCase,
)

__all__ = [
    "ConfirmPasswordResetUseCase",
    "ListUsersUseCase",
    "LoginUseCase",
    "RegisterUseCase",
    "RequestPasswordResetUseCase",
    "UpdateProfileUseCase",
    "VerifyResetTokenUseCase",
]
