# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SendBird API Server:
# - test_sendbird_client.py: Upstream client against a mocked transport
# - test_users_api.py: User/token endpoints with a mocked client
# - test_app.py: Health check, 404 fallback, internal error handling
# - test_models.py: Payload and envelope schemas
# - test_config.py: Settings loading and fail-fast credentials
#
# Run tests with: pytest
# =============================================================================
