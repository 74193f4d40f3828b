# =============================================================================
# core/ - Domain Models Package
# =============================================================================
# This package contains framework-agnostic schemas:
# - models/: Pydantic schemas for request payloads and response envelopes
#
# Code in this package should NOT import from FastAPI.
# This keeps the models testable and reusable.
# =============================================================================
