"""Default values for settings.

All default values used in the DriftSettings model and CLI options.
"""

from typing import Final

# ============================================================================
# GitHub defaults
# ============================================================================

HISTORY_COUNT_DEFAULT: Final = 10
TAG_HISTORY_COUNT_DEFAULT: Final = 30
GITHUB_CONCURRENCY_DEFAULT: Final = 5
GITHUB_BASE_URL_DEFAULT: Final = "https://api.github.com"
RELEASES_PER_PAGE_DEFAULT: Final = 100

# ============================================================================
# CLI defaults
# ============================================================================

CONFIG_PATH_DEFAULT: Final = "config.yaml"
LOG_LEVEL_DEFAULT: Final = "info"
KUBECONFIG_PATH_DEFAULT: Final = "~/.kube/config"

__all__ = [
    "CONFIG_PATH_DEFAULT",
    "GITHUB_BASE_URL_DEFAULT",
    "GITHUB_CONCURRENCY_DEFAULT",
    "HISTORY_COUNT_DEFAULT",
    "KUBECONFIG_PATH_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "RELEASES_PER_PAGE_DEFAULT",
    "TAG_HISTORY_COUNT_DEFAULT",
]
