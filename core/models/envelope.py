# =============================================================================
# core/models/envelope.py - Response Envelope Schemas
# =============================================================================
# Every response from the API uses one of these shapes:
#
#   success: {"success": true,  "data": <upstream body>, "message": "..."}
#   failure: {"success": false, "error": "<detail>",     "message": "..."}
#
# A response never carries both "data" and "error".
# =============================================================================

from typing import Any, Literal

from pydantic import BaseModel, Field

from .user import CreatedUser, TokenResult


class SuccessEnvelope(BaseModel):
    """Successful response. data is the upstream body, passed through as-is."""
    success: Literal[True] = True
    data: Any = Field(..., description="Upstream response body")
    message: str


class ErrorEnvelope(BaseModel):
    """Failed response. error is the detail, message a fixed summary."""
    success: Literal[False] = False
    error: str
    message: str


class NotFoundEnvelope(ErrorEnvelope):
    """Unmatched route response, listing the routes that do exist."""
    availableEndpoints: list[str] = Field(default_factory=list)


class TokenEnvelope(SuccessEnvelope):
    """Success envelope for the token endpoint (OpenAPI documentation)."""
    data: TokenResult


class UserEnvelope(SuccessEnvelope):
    """Success envelope for the user creation endpoint (OpenAPI documentation)."""
    data: CreatedUser

