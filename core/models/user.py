# =============================================================================
# core/models/user.py - Sendbird User Schemas
# =============================================================================
# These models describe the payloads exchanged with Sendbird:
# - UserRecord: Body of POST /api/users, forwarded verbatim to Sendbird
# - TokenResult: What Sendbird returns for a token request
# - CreatedUser: What Sendbird returns after creating a user
#
# Nothing here is persisted: records live for one request/response cycle.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """
    Schema for creating a Sendbird user.

    user_id is required by Sendbird, but it is declared optional here so
    that a missing value reaches the route handler and is reported with
    the standard error envelope instead of a framework validation error.

    Fields not listed below are accepted and passed through to Sendbird.
    Only fields the caller actually sent are forwarded (see to_payload),
    so Sendbird's own default for issue_access_token applies when the
    caller omits it.

    Example:
        {
            "user_id": "john_doe",
            "nickname": "John Doe",
            "profile_url": "https://example.com/avatar.jpg",
            "issue_access_token": true
        }
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "user_id": "john_doe",
                "nickname": "John Doe",
                "profile_url": "https://example.com/avatar.jpg",
                "issue_access_token": True,
            }
        },
    )

    user_id: str | None = Field(
        default=None,
        description="Unique identifier for the user (required)",
    )

    nickname: str | None = Field(
        default=None,
        description="Display name for the user",
    )

    # Sendbird expects a URI, but it is not checked locally
    profile_url: str | None = Field(
        default=None,
        description="URL to user profile image",
    )

    issue_access_token: bool | None = Field(
        default=None,
        description="Whether to issue an access token immediately",
    )

    def to_payload(self) -> dict:
        """Return only the fields the caller set, extras included."""
        return self.model_dump(exclude_unset=True)


class TokenResult(BaseModel):
    """Access token issued by Sendbird. Passed through, never interpreted."""
    access_token: str | None = None
    expires_at: float | None = None


class CreatedUser(BaseModel):
    """User as returned by Sendbird after creation."""
    model_config = ConfigDict(extra="allow")

    user_id: str | None = None
    nickname: str | None = None
    profile_url: str | None = None
    access_token: str | None = None
