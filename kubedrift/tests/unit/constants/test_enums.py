"""Tests for enum constants."""

from __future__ import annotations

from kubedrift.constants.enums import DriftSeverity, LogLevel, WorkloadKind


class TestWorkloadKind:
    """Tests for WorkloadKind enum."""

    def test_deployment_list_path(self) -> None:
        """Test Deployment list endpoint."""
        assert (
            WorkloadKind.PLAIN_DEPLOYMENT.list_path("shop")
            == "/apis/apps/v1/namespaces/shop/deployments"
        )
        assert WorkloadKind.PLAIN_DEPLOYMENT.display_name == "Deployment"

    def test_rollout_list_path(self) -> None:
        """Test Argo Rollout list endpoint."""
        assert (
            WorkloadKind.PROGRESSIVE_ROLLOUT.list_path("shop")
            == "/apis/argoproj.io/v1alpha1/namespaces/shop/rollouts"
        )
        assert WorkloadKind.PROGRESSIVE_ROLLOUT.display_name == "Rollout"


class TestDriftSeverity:
    """Tests for DriftSeverity enum."""

    def test_styles(self) -> None:
        """Test each bucket carries its rich style."""
        assert DriftSeverity.UNKNOWN.style == ""
        assert DriftSeverity.UP_TO_DATE.style == "green"
        assert DriftSeverity.MINOR.style == "yellow"
        assert DriftSeverity.MODERATE.style == "red"
        assert DriftSeverity.SEVERE.style == "bold blink red"


class TestLogLevel:
    """Tests for LogLevel enum."""

    def test_values(self) -> None:
        """Test accepted log level names."""
        assert [level.value for level in LogLevel] == [
            "debug",
            "info",
            "warning",
            "error",
            "critical",
        ]
