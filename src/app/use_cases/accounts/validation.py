from typing import Dict, Optional

from libs.result import Error, Result, Return
from src.app.services.password_hasher import MAX_PASSWORD_BYTES


def is_blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


def require_fields(fields: Dict[str, Optional[str]]) -> Result[None]:
    """
    Every field must be present and non-blank.

    Args:
        fields: Mapping of field name to submitted value

    Returns:
        Result with None, or VALIDATION_ERROR naming the missing fields
    """
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        return Return.err(
            Error("VALIDATION_ERROR", f"All fields are required: {', '.join(missing)}")
        )
    return Return.ok(None)


def validate_password(password: Optional[str]) -> Result[None]:
    if is_blank(password):
        return Return.err(Error("VALIDATION_ERROR", "Password is required"))

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            )
        )

    return Return.ok(None)
