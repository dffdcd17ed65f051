"""
Account API Routes

Registration, login, profile update and user listing.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_tokens import SessionTokenIssuer, TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    ListUsersResponse,
    ListUsersUseCase,
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    UpdateProfileCommand,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)
from src.app.use_cases.accounts.dtos import CamelModel
from src.depends import (
    get_current_user,
    get_password_hasher,
    get_session_token_issuer,
    get_unit_of_work,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Accounts"])


def parse_account_id(raw_id: str) -> UUID:
    """Ids that are not UUIDs cannot name an account"""
    try:
        return UUID(raw_id)
    except ValueError:
        raise ClientError(
            Error("ACCOUNT_NOT_FOUND", f"User with ID {raw_id} not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )


@router.get("/", status_code=status.HTTP_200_OK, response_model=ListUsersResponse)
async def list_users(
    limit: int = Query(10, description="Page size (default 10, max 100)"),
    page: int = Query(1, description="1-based page number"),
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users

    Paginated listing of accounts. Requires a session token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session token
        - 500 Internal Server Error: Server error
    """
    use_case = ListUsersUseCase(uow)
    result = await use_case.execute(limit=limit, page=page)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Every field is optional here; missing fields are reported as
    VALIDATION_ERROR (400) by the use case.
    """

    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    email: Optional[str] = Field(None, description="User email address")
    phone: Optional[str] = Field(None, description="Phone number")
    password: Optional[str] = Field(None, description="Password")
    confirm_password: Optional[str] = Field(None, description="Password confirmation")
    is_admin: Optional[bool] = Field(None, description="Admin flag, defaults to false")


@router.post("/register", status_code=status.HTTP_200_OK, response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    session_tokens: SessionTokenIssuer = Depends(get_session_token_issuer),
):
    """
    Register

    Creates an account and returns it together with a session token.

    Raises:
        - 400 Bad Request: Missing fields or password mismatch
        - 409 Conflict: Email already registered
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone=request.phone,
        password=request.password,
        confirm_password=request.confirm_password,
        is_admin=bool(request.is_admin),
    )

    use_case = RegisterUseCase(uow, hasher, session_tokens)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(CamelModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    session_tokens: SessionTokenIssuer = Depends(get_session_token_issuer),
):
    """
    Login

    Authenticates with email and password and returns a session token.

    Raises:
        - 400 Bad Request: Missing fields or invalid credentials
        - 404 Not Found: Unknown email (only when UNIFY_LOGIN_ERRORS is off)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, hasher, session_tokens)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("ACCOUNT_NOT_FOUND", "INVALID_CREDENTIALS"):
            logger.info(f"Failed login: {error.code}")
            if ApplicationConfig.UNIFY_LOGIN_ERRORS:
                raise ClientError(
                    Error("INVALID_CREDENTIALS", "Email or password is incorrect"),
                    status_code=status.HTTP_400_BAD_REQUEST,
                )
        raise_for_error(error)

    return result.value


class UpdateUserRequest(CamelModel):
    """Update user HTTP request payload"""

    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    email: Optional[str] = Field(None, description="User email address")
    phone: Optional[str] = Field(None, description="Phone number")


@router.put(
    "/updateuser/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=UpdateProfileResponse,
)
async def update_user(
    account_id: str,
    request: UpdateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update User

    Overwrites first name, last name, email and phone. Safe to repeat.

    Raises:
        - 400 Bad Request: Missing fields
        - 404 Not Found: Unknown account id
        - 409 Conflict: Email belongs to another account
        - 500 Internal Server Error: Server error
    """
    command = UpdateProfileCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone=request.phone,
    )

    use_case = UpdateProfileUseCase(uow)
    result = await use_case.execute(parse_account_id(account_id), command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
