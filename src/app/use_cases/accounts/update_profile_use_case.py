from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.user_repository import DuplicateEmailError
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UpdateProfileCommand, UpdateProfileResponse
from .validation import require_fields


class UpdateProfileUseCase:
    """
    Overwrite first name, last name, email and phone of an account.

    Repeating the same update is harmless. Changing the email to one owned
    by another account is rejected with DUPLICATE_ACCOUNT.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, command: UpdateProfileCommand
    ) -> Result[UpdateProfileResponse]:
        required = require_fields(
            {
                "firstName": command.first_name,
                "lastName": command.last_name,
                "email": command.email,
                "phone": command.phone,
            }
        )
        if required.is_err():
            return Return.err(required.error)

        not_found = Error("ACCOUNT_NOT_FOUND", f"User with ID {account_id} not found")

        async with self.uow:
            user = await self.uow.users.get_by_id(account_id)
            if user is None:
                return Return.err(not_found)

            if command.email != user.email:
                owner = await self.uow.users.get_by_email(command.email)
                if owner is not None and owner.id != account_id:
                    return Return.err(Error("DUPLICATE_ACCOUNT", "Email already in use"))

            try:
                affected = await self.uow.users.update_profile(
                    account_id,
                    first_name=command.first_name,
                    last_name=command.last_name,
                    email=command.email,
                    phone=command.phone,
                )
            except DuplicateEmailError:
                return Return.err(Error("DUPLICATE_ACCOUNT", "Email already in use"))

            if affected == 0:
                return Return.err(not_found)

            await self.uow.commit()

        return Return.ok(
            UpdateProfileResponse(message="The user has been updated successfully")
        )
