"""Kubernetes API errors raised by the workload fetcher."""

from __future__ import annotations


class KubernetesError(Exception):
    """Base exception for Kubernetes API failures."""


class KubernetesRequestError(KubernetesError):
    """Raised when a list request returns an unexpected status."""

    def __init__(self, path: str, status_code: int) -> None:
        super().__init__(f"Kubernetes API request to {path} failed with status {status_code}")
        self.path = path
        self.status_code = status_code


class KubernetesDecodeError(KubernetesError):
    """Raised when a list response cannot be decoded."""

    def __init__(self, kind: str, path: str, reason: str) -> None:
        super().__init__(f"Cannot decode {kind} list from {path}: {reason}")
        self.kind = kind
        self.path = path


class KubernetesConnectionError(KubernetesError):
    """Raised when the API server cannot be reached or times out."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot reach Kubernetes API at {path}: {reason}")
        self.path = path
