# =============================================================================
# tests/test_users_api.py - User & Token Endpoint Tests
# =============================================================================
# Tests for app/routers/users.py through the full FastAPI stack:
# - Missing input short-circuits with 400 and no Sendbird call
# - Success envelopes wrap the upstream body unmodified
# - Upstream failures map to status/error from the upstream
#
# The Sendbird client is a MagicMock injected into create_app().
# =============================================================================

from __future__ import annotations

import pytest

from lib.sendbird_client import SendbirdClientError


def upstream_error(status_code=None, detail=None, message=None):
    """Build the error SendbirdClient raises."""
    if message is None:
        message = f"Request failed with status code {status_code}" if status_code else "Connection refused"
    body = {"message": detail} if detail else None
    return SendbirdClientError(message, status_code=status_code, detail=detail, body=body)


# =============================================================================
# GET /api/users/{user_id}/token
# =============================================================================

class TestGetUserToken:
    """Test the token endpoint."""

    def test_token_for_encoded_user_id(self, api, mock_sendbird, sample_token):
        """Test GET /api/users/User%202/token returns the token envelope."""
        mock_sendbird.get_user_token.return_value = sample_token

        response = api.get("/api/users/User%202/token")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"access_token": "tok123", "expires_at": 1700000000},
            "message": "Token retrieved successfully for user: User 2",
        }
        mock_sendbird.get_user_token.assert_called_once_with("User 2")

    def test_upstream_body_passed_through(self, api, mock_sendbird):
        """Test fields beyond the token are not dropped or reshaped."""
        body = {"token": "abc", "expires_at": 0, "extra": [1, 2, 3]}
        mock_sendbird.get_user_token.return_value = body

        response = api.get("/api/users/john/token")

        assert response.json()["data"] == body

    def test_upstream_status_propagated(self, api, mock_sendbird):
        """Test an upstream 404 becomes a 404 with the upstream message."""
        mock_sendbird.get_user_token.side_effect = upstream_error(404, "User not found.")

        response = api.get("/api/users/ghost/token")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "User not found.",
            "message": "Failed to get user token",
        }

    def test_upstream_error_without_detail_uses_error_message(self, api, mock_sendbird):
        """Test the client error message is used when the body has none."""
        mock_sendbird.get_user_token.side_effect = upstream_error(503)

        response = api.get("/api/users/john/token")

        assert response.status_code == 503
        assert response.json()["error"] == "Request failed with status code 503"

    def test_transport_failure_is_500(self, api, mock_sendbird):
        """Test an upstream failure with no status maps to 500."""
        mock_sendbird.get_user_token.side_effect = upstream_error(message="Connection refused")

        response = api.get("/api/users/john/token")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Connection refused",
            "message": "Failed to get user token",
        }

    def test_empty_user_id(self, api, mock_sendbird):
        """Test an empty user ID segment is a 400 and never reaches Sendbird."""
        response = api.get("/api/users//token")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "User ID is required",
            "message": "Please provide a valid user ID",
        }
        mock_sendbird.get_user_token.assert_not_called()

    def test_user_id_with_encoded_slash(self, api, mock_sendbird, sample_token):
        """Test a %2F inside the user ID is kept as part of the ID."""
        mock_sendbird.get_user_token.return_value = sample_token

        response = api.get("/api/users/team%2Falice/token")

        assert response.status_code == 200
        assert response.json()["data"] == sample_token
        assert response.json()["message"] == "Token retrieved successfully for user: team/alice"
        mock_sendbird.get_user_token.assert_called_once_with("team/alice")

    def test_empty_user_id_rejected_by_handler(self, mock_sendbird):
        """Test the handler itself rejects an empty user ID without a call."""
        from app.exceptions import MissingFieldError
        from app.routers.users import get_user_token

        with pytest.raises(MissingFieldError) as excinfo:
            get_user_token("", mock_sendbird)

        assert excinfo.value.status_code == 400
        assert excinfo.value.error == "User ID is required"
        mock_sendbird.get_user_token.assert_not_called()


# =============================================================================
# POST /api/users
# =============================================================================

class TestCreateUser:
    """Test the user creation endpoint."""

    def test_missing_user_id(self, api, mock_sendbird):
        """Test POST /api/users with {} returns 400 and calls nothing."""
        response = api.post("/api/users", json={})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "user_id is required",
            "message": "Please provide a user_id in the request body",
        }
        mock_sendbird.create_user.assert_not_called()

    @pytest.mark.parametrize(
        "body",
        [
            {"user_id": ""},
            {"user_id": None},
            {"nickname": "No Id"},
        ],
    )
    def test_empty_user_id_variants(self, api, mock_sendbird, body):
        """Test every empty user_id form is rejected without a call."""
        response = api.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "user_id is required"
        mock_sendbird.create_user.assert_not_called()

    def test_no_body(self, api, mock_sendbird):
        """Test a request with no body at all is a missing user_id."""
        response = api.post("/api/users")

        assert response.status_code == 400
        assert response.json()["error"] == "user_id is required"
        mock_sendbird.create_user.assert_not_called()

    def test_form_encoded_body(self, api, mock_sendbird):
        """Test a form-encoded body is accepted like JSON."""
        mock_sendbird.create_user.return_value = {"user_id": "u1", "nickname": "Bob"}

        response = api.post("/api/users", data={"user_id": "u1", "nickname": "Bob"})

        assert response.status_code == 201
        assert response.json()["data"] == {"user_id": "u1", "nickname": "Bob"}
        mock_sendbird.create_user.assert_called_once_with({"user_id": "u1", "nickname": "Bob"})

    def test_form_encoded_boolean(self, api, mock_sendbird):
        """Test issue_access_token=true in a form body is forwarded as a boolean."""
        mock_sendbird.create_user.return_value = {"user_id": "u1", "access_token": "tok"}

        api.post("/api/users", data={"user_id": "u1", "issue_access_token": "true"})

        mock_sendbird.create_user.assert_called_once_with({"user_id": "u1", "issue_access_token": True})

    def test_form_encoded_without_user_id(self, api, mock_sendbird):
        """Test a form body missing user_id gets the same 400 as JSON."""
        response = api.post("/api/users", data={"nickname": "Bob"})

        assert response.status_code == 400
        assert response.json()["error"] == "user_id is required"
        mock_sendbird.create_user.assert_not_called()

    def test_unsupported_content_type(self, api, mock_sendbird):
        """Test a body of another content type is treated as no body."""
        response = api.post("/api/users", content=b"user_id u1", headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        mock_sendbird.create_user.assert_not_called()

    def test_create_with_token_round_trip(self, api, mock_sendbird, sample_user_payload):
        """Test issue_access_token=true returns the mocked token in data."""
        mock_sendbird.create_user.side_effect = lambda data: {**data, "access_token": "tok-abc"}

        response = api.post("/api/users", json=sample_user_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        assert body["data"]["access_token"] == "tok-abc"
        assert body["data"]["user_id"] == "john_doe"

    def test_payload_forwarded_without_defaults(self, api, mock_sendbird):
        """Test omitted fields are not filled in before forwarding."""
        mock_sendbird.create_user.return_value = {"user_id": "minimal"}

        api.post("/api/users", json={"user_id": "minimal"})

        mock_sendbird.create_user.assert_called_once_with({"user_id": "minimal"})

    def test_extra_fields_forwarded(self, api, mock_sendbird, sample_user_payload):
        """Test Sendbird fields not modelled locally still reach Sendbird."""
        payload = {**sample_user_payload, "metadata": {"team": "blue"}}
        mock_sendbird.create_user.return_value = payload

        api.post("/api/users", json=payload)

        mock_sendbird.create_user.assert_called_once_with(payload)

    def test_profile_url_not_validated(self, api, mock_sendbird):
        """Test a non-URI profile_url is passed through untouched."""
        mock_sendbird.create_user.return_value = {}

        response = api.post("/api/users", json={"user_id": "u1", "profile_url": "not a url"})

        assert response.status_code == 201
        mock_sendbird.create_user.assert_called_once_with({"user_id": "u1", "profile_url": "not a url"})

    def test_duplicate_user(self, api, mock_sendbird):
        """Test Sendbird's duplicate-user error is surfaced with its status."""
        mock_sendbird.create_user.side_effect = upstream_error(
            400, "\"user_id\" violates unique constraint."
        )

        response = api.post("/api/users", json={"user_id": "dup"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "\"user_id\" violates unique constraint.",
            "message": "Failed to create user",
        }

    def test_transport_failure_is_500(self, api, mock_sendbird):
        """Test a create failure without upstream status maps to 500."""
        mock_sendbird.create_user.side_effect = upstream_error(message="timed out")

        response = api.post("/api/users", json={"user_id": "u1"})

        assert response.status_code == 500
        assert response.json()["error"] == "timed out"
        assert response.json()["message"] == "Failed to create user"


# =============================================================================
# Envelope Invariant
# =============================================================================

class TestEnvelopeExclusivity:
    """success=true carries data and never error; success=false the reverse."""

    @pytest.mark.parametrize(
        "method,path,body,setup",
        [
            ("get", "/api/users/u1/token", None, lambda m: setattr(m.get_user_token, "return_value", {"access_token": "t"})),
            ("get", "/api/users/u1/token", None, lambda m: setattr(m.get_user_token, "side_effect", upstream_error(403, "Forbidden"))),
            ("post", "/api/users", {"user_id": "u1"}, lambda m: setattr(m.create_user, "return_value", {"user_id": "u1"})),
            ("post", "/api/users", {"user_id": "u1"}, lambda m: setattr(m.create_user, "side_effect", upstream_error())),
            ("post", "/api/users", {}, lambda m: None),
            ("get", "/nonexistent", None, lambda m: None),
        ],
    )
    def test_exactly_one_branch(self, api, mock_sendbird, method, path, body, setup):
        setup(mock_sendbird)

        if method == "post":
            response = api.post(path, json=body)
        else:
            response = api.get(path)

        envelope = response.json()
        assert "message" in envelope
        if envelope["success"]:
            assert "data" in envelope
            assert "error" not in envelope
        else:
            assert "error" in envelope
            assert "data" not in envelope
