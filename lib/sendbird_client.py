# =============================================================================
# lib/sendbird_client.py - Sendbird Platform API Client
# =============================================================================
# Thin wrapper around the Sendbird Platform REST API (v3).
#
# The client owns the upstream base URL and API token, and exposes one method
# per upstream call. Each method performs exactly one HTTP request and returns
# the upstream JSON body unmodified. Failures are raised as SendbirdClientError
# carrying whatever the upstream told us (status code and message).
#
# No retries, no caching: calling create_user twice with the same user_id
# surfaces Sendbird's own duplicate-user error on the second call.
#
# Usage:
#   from lib.sendbird_client import SendbirdClient
#   client = SendbirdClient(application_id="ABC-123", api_token="...")
#   token = client.get_user_token("User 2")
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from lib.utils import ApplicationError, encode_path_segment

if TYPE_CHECKING:
    from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# Every Sendbird application has its own API host
BASE_URL_TEMPLATE = "https://api-{application_id}.sendbird.com"

API_TOKEN_HEADER = "Api-Token"


class SendbirdConfigError(ApplicationError):
    """Raised when the client is built without an application ID or API token."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"{' and '.join(missing)} must be set in environment variables",
            code="SENDBIRD_CONFIG_MISSING",
            suggestion="Set SENDBIRD_APPLICATION_ID and SENDBIRD_API_TOKEN in your .env file",
            details={"missing": missing},
        )


class SendbirdClientError(ApplicationError):
    """
    Error returned by (or while talking to) the Sendbird API.

    Exactly one of two shapes:
    - HTTP error: status_code is the upstream status, detail is the
      upstream "message" field when the body carried one, body is the
      parsed response body.
    - Transport error (connection refused, DNS, timeout): status_code,
      detail and body are all None.

    Attributes:
        status_code: Upstream HTTP status, or None for transport failures
        detail: Upstream-provided error message, if any
        body: Parsed upstream error body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
        body: Any = None,
    ):
        super().__init__(
            message=message,
            code="SENDBIRD_HTTP_ERROR" if status_code is not None else "SENDBIRD_TRANSPORT_ERROR",
            details={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.detail = detail
        self.body = body

    @classmethod
    def from_response(cls, response: httpx.Response) -> SendbirdClientError:
        """Build an error from a non-2xx upstream response."""
        try:
            body = response.json()
        except ValueError:
            body = response.text or None

        detail = None
        if isinstance(body, dict) and body.get("message"):
            detail = str(body["message"])

        return cls(
            message=f"Request failed with status code {response.status_code}",
            status_code=response.status_code,
            detail=detail,
            body=body,
        )

    @classmethod
    def from_transport_error(cls, exc: httpx.HTTPError) -> SendbirdClientError:
        """Build an error from a network-level failure (no response received)."""
        return cls(message=str(exc) or "Upstream request failed")


class SendbirdClient:
    """
    Client for the Sendbird Platform API.

    Holds only read-only configuration after construction, so a single
    instance is safely shared by every request handler.

    Example:
        with SendbirdClient("ABC-123", "secret-token") as client:
            user = client.create_user({"user_id": "john_doe", "issue_access_token": True})
            print(user["access_token"])
    """

    def __init__(
        self,
        application_id: str | None,
        api_token: str | None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Create the client.

        Args:
            application_id: Sendbird application ID (part of the API host name)
            api_token: Master or secondary API token
            transport: Optional httpx transport (tests inject a MockTransport)

        Raises:
            SendbirdConfigError: If either credential is missing or empty
        """
        missing = []
        if not application_id:
            missing.append("SENDBIRD_APPLICATION_ID")
        if not api_token:
            missing.append("SENDBIRD_API_TOKEN")
        if missing:
            raise SendbirdConfigError(missing)

        self.application_id = application_id
        self.base_url = BASE_URL_TEMPLATE.format(application_id=application_id)
        self._http = httpx.Client(
            base_url=self.base_url,
            headers={
                API_TOKEN_HEADER: api_token,
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SendbirdClient:
        """Build a client from the application Settings."""
        return cls(
            application_id=settings.SENDBIRD_APPLICATION_ID,
            api_token=settings.SENDBIRD_API_TOKEN,
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def get_user_token(self, user_id: str) -> dict[str, Any]:
        """
        Create (or fetch) a session token for a user.

        Args:
            user_id: The Sendbird user ID (percent-encoded into the path)

        Returns:
            dict: Upstream body, e.g. {"token": "...", "expires_at": 1700000000}

        Raises:
            SendbirdClientError: On a non-2xx response or a transport failure
        """
        logger.info(f"Getting token for user: {user_id}")
        data = self._post(f"/v3/users/{encode_path_segment(user_id)}/token", {})
        logger.info(f"User token retrieved successfully: {data}")
        return data

    def create_user(self, user_data: dict[str, Any]) -> dict[str, Any]:
        """
        Create a new Sendbird user.

        The payload is forwarded as-is. When issue_access_token is true the
        upstream response includes the issued access_token.

        Args:
            user_data: user_id plus optional nickname, profile_url,
                issue_access_token and any other Sendbird user fields

        Returns:
            dict: The created user as returned by Sendbird

        Raises:
            SendbirdClientError: On a non-2xx response or a transport failure
        """
        logger.info(f"Creating user with data: {user_data}")
        data = self._post("/v3/users", user_data)
        logger.info(f"User created successfully: {data}")
        return data

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        try:
            response = self._http.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Sendbird request to {path} failed: {e}")
            raise SendbirdClientError.from_transport_error(e) from e

        if not response.is_success:
            error = SendbirdClientError.from_response(response)
            logger.error(f"Sendbird returned {response.status_code} for {path}: {error.body}")
            raise error

        if not response.content:
            return None
        return response.json()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> SendbirdClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
