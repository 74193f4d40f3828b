# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

import json
from typing import Annotated
from urllib.parse import parse_qsl

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from core.models.user import UserRecord
from lib.sendbird_client import SendbirdClient

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_sendbird_client(request: Request) -> SendbirdClient:
    """
    Get the Sendbird client instance.

    Returns the client built once by create_app() and stored on app.state.
    """
    return request.app.state.sendbird_client


async def read_user_record(request: Request) -> UserRecord | None:
    """
    Parse the request body into a UserRecord.

    Accepts JSON and flat form-encoded bodies (user_id=u1&nickname=Bob).
    Returns None for an empty body or any other content type, which the
    route reports as a missing user_id.

    Raises:
        RequestValidationError: If the body cannot be parsed or is not an object
    """
    body = await request.body()
    if not body:
        return None

    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(FORM_CONTENT_TYPE):
            data = dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
        elif not content_type or "json" in content_type:
            data = json.loads(body)
        else:
            return None
        return UserRecord.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "body_invalid", "loc": ("body",), "msg": str(e), "input": None}]
        ) from e


# Type aliases for dependency injection
SendbirdDep = Annotated[SendbirdClient, Depends(get_sendbird_client)]
UserRecordBody = Annotated[UserRecord | None, Depends(read_user_record)]
