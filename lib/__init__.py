# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - sendbird_client.py: Sendbird Platform API client (one method per call)
# - utils.py: Shared utilities (base error class, URL path encoding)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.sendbird_client import SendbirdClient, SendbirdClientError, SendbirdConfigError
from lib.utils import ApplicationError, encode_path_segment

__all__ = [
    # Sendbird
    "SendbirdClient",
    "SendbirdClientError",
    "SendbirdConfigError",
    # Utils
    "ApplicationError",
    "encode_path_segment",
]
