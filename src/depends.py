from datetime import timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette import status

from config import ApplicationConfig
from src.adapter.services.smtp_mail_dispatcher import SmtpMailDispatcher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.mail_dispatcher import MailOutbox
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.session_tokens import SessionTokenIssuer, TokenClaims

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

# Process-wide services, configured once from ApplicationConfig
password_hasher = PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)

session_token_issuer = SessionTokenIssuer(
    secret=ApplicationConfig.JWT_SECRET,
    ttl=timedelta(minutes=ApplicationConfig.SESSION_TOKEN_TTL_MINUTES),
)

reset_token_protocol = ResetTokenProtocol(
    process_secret=ApplicationConfig.JWT_SECRET,
    hasher=password_hasher,
    ttl=timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
)

mail_outbox = MailOutbox(
    SmtpMailDispatcher(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        sender=ApplicationConfig.MAIL_FROM,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
    )
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session, timeout=ApplicationConfig.STORE_TIMEOUT_SECONDS)


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_session_token_issuer() -> SessionTokenIssuer:
    return session_token_issuer


def get_reset_token_protocol() -> ResetTokenProtocol:
    return reset_token_protocol


def get_mail_outbox() -> MailOutbox:
    return mail_outbox


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    session_tokens: SessionTokenIssuer = Depends(get_session_token_issuer),
) -> TokenClaims:
    """
    Dependency to extract and verify the session token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header
        session_tokens: Session token issuer

    Returns:
        TokenClaims with account id and email

    Raises:
        ClientError: 401 if token is invalid or expired
    """
    result = session_tokens.verify(credentials.credentials)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
