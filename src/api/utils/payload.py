from typing import Any, Dict

from fastapi import Request

from libs.result import Error
from src.api.error import ClientError


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a JSON or form-encoded body into a dict.

    The password reset pages post HTML forms; API clients post JSON.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ClientError(Error("VALIDATION_ERROR", "Malformed JSON body"))
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
