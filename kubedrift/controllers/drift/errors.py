"""Run-level drift detection errors."""


class DriftError(Exception):
    """Base exception for fatal drift detection failures."""


class NoApplicationsFoundError(DriftError):
    """Raised when no context returned any application."""

    def __init__(self, namespace: str) -> None:
        super().__init__(
            f"No applications found in any of the specified contexts and namespace '{namespace}'"
        )
        self.namespace = namespace
