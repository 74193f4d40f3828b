# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a mocked Sendbird client and an API test client around it
# - Provides a real SendbirdClient wired to an httpx.MockTransport
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SENDBIRD_APPLICATION_ID", "TEST-APP-ID")
os.environ.setdefault("SENDBIRD_API_TOKEN", "test-api-token")
os.environ.setdefault("ENVIRONMENT", "development")

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from lib.sendbird_client import SendbirdClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mock_sendbird():
    """A stand-in for SendbirdClient; configure return_value/side_effect per test."""
    client = MagicMock(spec=SendbirdClient)
    client.base_url = "https://api-TEST-APP-ID.sendbird.com"
    return client


@pytest.fixture
def api(mock_sendbird):
    """TestClient for an app wired to the mocked Sendbird client."""
    app = create_app(sendbird_client=mock_sendbird)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def recorded_requests():
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_sendbird_client(recorded_requests):
    """
    Build a real SendbirdClient whose HTTP calls go to a handler function.

    Usage:
        client = make_sendbird_client(lambda request: httpx.Response(200, json={...}))
    """
    clients = []

    def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = SendbirdClient(
            application_id="TEST-APP-ID",
            api_token="test-api-token",
            transport=httpx.MockTransport(_record),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def sample_token():
    """Token body as returned by Sendbird."""
    return {"access_token": "tok123", "expires_at": 1700000000}


@pytest.fixture
def sample_user_payload():
    """A complete user creation request body."""
    return {
        "user_id": "john_doe",
        "nickname": "John Doe",
        "profile_url": "https://example.com/avatar.jpg",
        "issue_access_token": True,
    }
