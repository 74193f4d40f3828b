# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Sendbird user and token payloads
# - envelope.py: Uniform success/error response envelopes
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Sendbird payloads
# -----------------------------------------------------------------------------
from .user import (
    CreatedUser,
    TokenResult,
    UserRecord,
)

# -----------------------------------------------------------------------------
# Envelope Models - API response shapes
# -----------------------------------------------------------------------------
from .envelope import (
    ErrorEnvelope,
    NotFoundEnvelope,
    SuccessEnvelope,
    TokenEnvelope,
    UserEnvelope,
)

__all__ = [
    # User
    "CreatedUser",
    "TokenResult",
    "UserRecord",
    # Envelope
    "ErrorEnvelope",
    "NotFoundEnvelope",
    "SuccessEnvelope",
    "TokenEnvelope",
    "UserEnvelope",
]
