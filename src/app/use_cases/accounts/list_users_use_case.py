from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ListUsersResponse, UserSummary

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
MAX_LIMIT = 100


class ListUsersUseCase:
    """Page through accounts, newest last. Password hashes are never included."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, limit: int = DEFAULT_LIMIT, page: int = DEFAULT_PAGE) -> Result[ListUsersResponse]:
        # Non-positive values fall back to the defaults
        limit = min(limit, MAX_LIMIT) if limit and limit > 0 else DEFAULT_LIMIT
        page = page if page and page > 0 else DEFAULT_PAGE
        offset = (page - 1) * limit

        async with self.uow:
            users = await self.uow.users.list(limit=limit, offset=offset)

            return Return.ok(
                ListUsersResponse(
                    users=[
                        UserSummary(
                            id=str(user.id),
                            first_name=user.first_name,
                            last_name=user.last_name,
                            email=user.email,
                            phone=user.phone,
                        )
                        for user in users
                    ],
                    limit=limit,
                    page=page,
                )
            )
