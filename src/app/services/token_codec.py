"""
HS256 token codec shared by session and reset tokens.

Expiry is checked against an injected clock instead of the wall clock
python-jose would use, so token lifetimes can be exercised in tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict

from jose import JWTError, jwt

ALGORITHM = "HS256"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenInvalidError(Exception):
    """Malformed token, bad signature or unexpected claims"""


class TokenExpiredError(Exception):
    """Signature is valid but the validity window has elapsed"""


def encode_token(
    claims: Dict[str, Any], secret: str, expires_in: timedelta, now: datetime
) -> str:
    """
    Sign claims with HS256.

    Args:
        claims: Payload claims (sub, email, type)
        secret: Signing secret
        expires_in: Token lifetime
        now: Issuance time

    Returns:
        Compact JWT string
    """
    payload = dict(claims)
    payload["iat"] = now
    payload["exp"] = now + expires_in
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str, token_type: str, now: datetime) -> Dict[str, Any]:
    """
    Verify signature first, then expiry.

    A token whose signature does not verify is reported as invalid even
    when it is also past its expiry.

    Raises:
        TokenInvalidError: malformed, bad signature, wrong type
        TokenExpiredError: valid signature, window elapsed
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as exc:
        raise TokenInvalidError(str(exc)) from exc

    if payload.get("type") != token_type:
        raise TokenInvalidError("Unexpected token type")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise TokenInvalidError("Token has no expiry")

    if now.timestamp() >= exp:
        raise TokenExpiredError("Token has expired")

    return payload
