"""Timeout constants for kubedrift.

All timeout values for Kubernetes and GitHub API requests.
"""

from typing import Final

# ============================================================================
# HTTP request timeouts (float, in seconds)
# ============================================================================

HTTP_REQUEST_TIMEOUT: Final = 30.0

# ============================================================================
# Credential plugin timeouts (int, in seconds)
# ============================================================================

EXEC_CREDENTIAL_TIMEOUT: Final = 30

__all__ = [
    "EXEC_CREDENTIAL_TIMEOUT",
    "HTTP_REQUEST_TIMEOUT",
]
