# =============================================================================
# app/routers/users.py - User & Token Endpoints
# =============================================================================
# Forwards user operations to Sendbird and wraps the outcome in the
# standard envelope.
#
# Handlers are plain functions: FastAPI runs them in its threadpool, so the
# blocking Sendbird call never stalls the event loop.
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.dependencies import FORM_CONTENT_TYPE, SendbirdDep, UserRecordBody
from app.exceptions import MissingFieldError, UpstreamRequestError
from core.models.envelope import ErrorEnvelope, SuccessEnvelope, TokenEnvelope, UserEnvelope
from core.models.user import UserRecord
from lib.sendbird_client import SendbirdClientError

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Bad request - missing required fields"},
    404: {"model": ErrorEnvelope, "description": "Not found"},
    500: {"model": ErrorEnvelope, "description": "Internal server error"},
}


# The body is parsed by read_user_record, so it is documented by hand
USER_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": UserRecord.model_json_schema()},
            FORM_CONTENT_TYPE: {"schema": UserRecord.model_json_schema()},
        },
    }
}


def _success(data, message: str, status_code: int = 200) -> JSONResponse:
    envelope = SuccessEnvelope(data=data, message=message)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/users/{user_id:path}/token",
    summary="Get user access token",
    responses={200: {"model": TokenEnvelope, "description": "Token retrieved successfully"}, **ERROR_RESPONSES},
)
def get_user_token(user_id: str, client: SendbirdDep):
    """
    Retrieve an access token for a specific user.

    The user ID is taken from the path, e.g. GET /api/users/User%202/token.
    It may itself contain slashes (sent as %2F).
    """
    if not user_id:
        raise MissingFieldError(
            error="User ID is required",
            message="Please provide a valid user ID",
        )

    try:
        token_data = client.get_user_token(user_id)
    except SendbirdClientError as e:
        logger.error(f"Error getting user token: {e.body or e.message}")
        raise UpstreamRequestError(e, message="Failed to get user token") from e

    return _success(token_data, f"Token retrieved successfully for user: {user_id}")


@router.post(
    "/users",
    summary="Create a new user",
    status_code=201,
    responses={201: {"model": UserEnvelope, "description": "User created successfully"}, **ERROR_RESPONSES},
    openapi_extra=USER_REQUEST_BODY,
)
def create_user(client: SendbirdDep, user: UserRecordBody):
    """
    Create a new Sendbird user.

    Only user_id is required. Set issue_access_token to true to receive
    an access token in the response.
    """
    if user is None or not user.user_id:
        raise MissingFieldError(
            error="user_id is required",
            message="Please provide a user_id in the request body",
        )

    user_data = user.to_payload()
    try:
        new_user = client.create_user(user_data)
    except SendbirdClientError as e:
        logger.error(f"Error creating user: {e.body or e.message}")
        raise UpstreamRequestError(e, message="Failed to create user") from e

    return _success(new_user, "User created successfully", status_code=201)
