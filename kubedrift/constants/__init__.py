"""Constants module for kubedrift.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, numbers with Final)
- timeouts.py: Timeout values (seconds)
- defaults.py: Default values for settings
- patterns.py: Compiled regex patterns
"""

from kubedrift.constants.defaults import (
    CONFIG_PATH_DEFAULT,
    GITHUB_CONCURRENCY_DEFAULT,
    HISTORY_COUNT_DEFAULT,
    LOG_LEVEL_DEFAULT,
    TAG_HISTORY_COUNT_DEFAULT,
)
from kubedrift.constants.enums import (
    DriftSeverity,
    LogLevel,
    WorkloadKind,
)
from kubedrift.constants.timeouts import HTTP_REQUEST_TIMEOUT
from kubedrift.constants.values import (
    APP_NAME,
    APP_VERSION,
    DISTANT_PAST,
    UNBOUNDED_DRIFT,
    UNKNOWN_MARKER,
)

__all__ = [
    # Application
    "APP_NAME",
    "APP_VERSION",
    # Defaults
    "CONFIG_PATH_DEFAULT",
    "DISTANT_PAST",
    "GITHUB_CONCURRENCY_DEFAULT",
    "HISTORY_COUNT_DEFAULT",
    # Timeouts
    "HTTP_REQUEST_TIMEOUT",
    "LOG_LEVEL_DEFAULT",
    "TAG_HISTORY_COUNT_DEFAULT",
    "UNBOUNDED_DRIFT",
    "UNKNOWN_MARKER",
    # Enums
    "DriftSeverity",
    "LogLevel",
    "WorkloadKind",
]
