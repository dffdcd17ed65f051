"""
Register Use Case

Creates an account and signs the new user in.
"""

import logging

from libs.result import Error, Result, Return
from src.app.repositories.user_repository import DuplicateEmailError
from src.app.services.password_hasher import HashingError, PasswordHasher
from src.app.services.session_tokens import SessionTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import RegisterCommand, RegisterResponse, RegisteredUser
from .validation import require_fields, validate_password

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. All of first name, last name, email, phone, password and
       confirmation are required
    2. Password and confirmation must match (surrounding whitespace ignored)
    3. Email must not already be registered
    4. Hash password with bcrypt
    5. Create User (is_admin defaults to False)
    6. Commit, then issue a session token for the new account
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        session_tokens: SessionTokenIssuer,
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_tokens = session_tokens

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with the submitted fields

        Returns:
            Result[RegisterResponse] with the created user and a session token,
            or Error(VALIDATION_ERROR | DUPLICATE_ACCOUNT | HASHING_ERROR)
        """
        required = require_fields(
            {
                "firstName": command.first_name,
                "lastName": command.last_name,
                "email": command.email,
                "phone": command.phone,
                "password": command.password,
                "confirmPassword": command.confirm_password,
            }
        )
        if required.is_err():
            return Return.err(required.error)

        if command.password.strip() != command.confirm_password.strip():
            return Return.err(
                Error("VALIDATION_ERROR", "Password and confirm password do not match")
            )

        password_check = validate_password(command.password)
        if password_check.is_err():
            return Return.err(password_check.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(Error("DUPLICATE_ACCOUNT", "User already exists"))

            try:
                password_hash = await self.hasher.hash_async(command.password)
            except HashingError:
                logger.exception("Password hashing failed during registration")
                return Return.err(Error("HASHING_ERROR", "Unable to process password"))

            user = User(
                first_name=command.first_name,
                last_name=command.last_name,
                email=command.email,
                phone=command.phone,
                password_hash=password_hash,
                is_admin=command.is_admin,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                # Lost a race with a concurrent registration for the same email
                return Return.err(Error("DUPLICATE_ACCOUNT", "User already exists"))

            await self.uow.commit()

            logger.info(f"Registered account {user.id}")

            token = self.session_tokens.issue(user.id, user.email)

            return Return.ok(
                RegisterResponse(
                    user=RegisteredUser(
                        id=str(user.id),
                        first_name=user.first_name,
                        last_name=user.last_name,
                        email=user.email,
                        phone=user.phone,
                        token=token,
                    )
                )
            )
