# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Base error type and URL helpers shared by the lib/ modules.
# =============================================================================

from typing import Any
from urllib.parse import quote


# Characters JavaScript's encodeURIComponent leaves untouched, beyond the
# alphanumerics and "-_." that urllib always keeps.
_URI_COMPONENT_SAFE = "!~*'()"


# =============================================================================
# URL Utilities
# =============================================================================

def encode_path_segment(value: str) -> str:
    """
    Percent-encode a value for use as a single URL path segment.

    Slashes, spaces and other reserved characters are escaped so the
    value can never change the shape of the path it is placed in.

    Example:
        encode_path_segment("User 2")    # "User%202"
        encode_path_segment("a/b")       # "a%2Fb"
    """
    return quote(value, safe=_URI_COMPONENT_SAFE)


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result
