"""Drift controller for multi-cluster version drift detection.

This module serves as the orchestrator of a drift detection run, delegating
to specialized components:
- WorkloadFetcher + WorkloadReconciler: per-context workload discovery
- ReleaseFetcher: per-application GitHub release history
- version_parser: drift counting
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar

import httpx

from kubedrift.constants.enums import WorkloadKind
from kubedrift.constants.timeouts import HTTP_REQUEST_TIMEOUT
from kubedrift.constants.values import GITHUB_ACCEPT_HEADER, USER_AGENT
from kubedrift.controllers.base import BaseController
from kubedrift.controllers.drift.errors import NoApplicationsFoundError
from kubedrift.controllers.releases.fetchers import ReleaseFetcher
from kubedrift.controllers.workloads.fetchers import WorkloadFetcher
from kubedrift.controllers.workloads.reconciler import WorkloadReconciler
from kubedrift.models.core.context_alias import ContextAlias
from kubedrift.models.core.workload_info import WorkloadRecord
from kubedrift.models.drift.drift_info import ApplicationDriftInfo, DeploymentVersionInfo
from kubedrift.models.releases.release_info import ReleaseRecord
from kubedrift.models.state.app_settings import DriftSettings
from kubedrift.utils.kubeconfig import (
    build_kube_client,
    load_kubeconfig,
    resolve_client_config,
)
from kubedrift.utils.version_parser import count_newer_releases

logger = logging.getLogger(__name__)

T = TypeVar("T")

KubeClientFactory = Callable[[str], Awaitable[httpx.AsyncClient]]


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive batches of at most ``size``."""
    if size <= 0:
        return [list(items)]
    return [list(items[start:start + size]) for start in range(0, len(items), size)]


def calculate_drift(
    workloads_by_alias: Mapping[str, Iterable[WorkloadRecord]],
    releases_by_app: Mapping[str, Sequence[ReleaseRecord]],
) -> list[ApplicationDriftInfo]:
    """Pair deployed versions with release histories.

    Args:
        workloads_by_alias: Context alias -> reconciled workloads
        releases_by_app: Application name -> newest-first releases

    Returns:
        One ApplicationDriftInfo per application seen in any context,
        sorted by application name.
    """
    deployments_by_app: dict[str, dict[str, DeploymentVersionInfo]] = {}
    for alias, workloads in workloads_by_alias.items():
        for workload in workloads:
            per_context = deployments_by_app.setdefault(workload.app_name, {})
            if alias in per_context:
                continue
            releases = releases_by_app.get(workload.app_name, [])
            per_context[alias] = DeploymentVersionInfo(
                version=workload.version,
                deployed_at=workload.observed_at,
                drift=count_newer_releases(workload.version, releases),
            )

    drift_infos: list[ApplicationDriftInfo] = []
    for app_name, deployments in deployments_by_app.items():
        if not deployments:
            continue
        releases = releases_by_app.get(app_name) or []
        drift_infos.append(
            ApplicationDriftInfo(
                app_name=app_name,
                deployments=deployments,
                latest_release=releases[0] if releases else None,
            )
        )
    return sorted(drift_infos, key=lambda info: info.app_name)


class DriftController(BaseController):
    """Drift detection run across several cluster contexts.

    Workloads are fetched with one task per context; release histories
    are fetched in sequential batches bounded by the configured GitHub
    concurrency. A failure in one context or one application degrades
    that entry only.
    """

    def __init__(
        self,
        contexts: Sequence[ContextAlias],
        namespace: str,
        settings: DriftSettings,
        github_token: str,
        *,
        kubeconfig_path: str | Path | None = None,
        kube_client_factory: KubeClientFactory | None = None,
        github_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the drift controller.

        Args:
            contexts: Kubeconfig contexts with their display aliases
            namespace: Namespace inspected in every context
            settings: Loaded drift settings
            github_token: GitHub token for API authentication
            kubeconfig_path: Optional kubeconfig location
            kube_client_factory: Async factory returning a cluster client for a context
            github_client: Optional pre-built GitHub client (not closed by the controller)
        """
        self.contexts = list(contexts)
        self.namespace = namespace
        self.settings = settings
        self._github_token = github_token
        self._kubeconfig_path = kubeconfig_path
        self._kube_client_factory = kube_client_factory or self._default_kube_client
        self._github_client = github_client
        self._reconciler = WorkloadReconciler()
        self._service_mappings = settings.service_mappings()
        logger.debug("Loaded %d service mappings", len(self._service_mappings))

    @property
    def context_aliases(self) -> list[str]:
        return [context.alias for context in self.contexts]

    async def _default_kube_client(self, context: str) -> httpx.AsyncClient:
        """Resolve kubeconfig credentials off the event loop."""

        def _resolve() -> httpx.AsyncClient:
            kubeconfig = load_kubeconfig(self._kubeconfig_path)
            return build_kube_client(resolve_client_config(kubeconfig, context))

        return await asyncio.to_thread(_resolve)

    def _build_github_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self._github_token}",
                "Accept": GITHUB_ACCEPT_HEADER,
                "User-Agent": USER_AGENT,
            },
            timeout=httpx.Timeout(HTTP_REQUEST_TIMEOUT),
        )

    def repository_for(self, app_name: str) -> str:
        """Return the GitHub repository mapped to an application."""
        return self._service_mappings.get(app_name, app_name)

    def _apply_filter(self, workloads: list[WorkloadRecord]) -> list[WorkloadRecord]:
        allowed = self.settings.kubernetes.service.filter
        if not allowed:
            return workloads
        return [workload for workload in workloads if workload.app_name in allowed]

    # ------------------------------------------------------------------
    # Stage 1: workloads per context
    # ------------------------------------------------------------------

    async def fetch_context_workloads(self, context_alias: ContextAlias) -> list[WorkloadRecord]:
        """Fetch and reconcile both workload kinds for one context.

        Raises:
            Exception: Any credential, transport or decoding failure.
        """
        service = self.settings.kubernetes.service
        client = await self._kube_client_factory(context_alias.context)
        async with client:
            fetcher = WorkloadFetcher(client, context_alias.context)
            # Both lists must settle before the client closes.
            results = await asyncio.gather(
                fetcher.fetch_workloads(
                    self.namespace,
                    service.selector,
                    WorkloadKind.PLAIN_DEPLOYMENT,
                ),
                fetcher.fetch_workloads(
                    self.namespace,
                    service.effective_rollout_selector,
                    WorkloadKind.PROGRESSIVE_ROLLOUT,
                ),
                return_exceptions=True,
            )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        deployments, rollouts = results
        return self._apply_filter(self._reconciler.reconcile(deployments, rollouts))

    async def _fetch_context_safe(
        self, context_alias: ContextAlias
    ) -> tuple[str, list[WorkloadRecord]]:
        try:
            workloads = await self.fetch_context_workloads(context_alias)
        except Exception as exc:
            logger.error(
                "Failed to get deployments for %s: %s",
                context_alias.context,
                exc,
            )
            return context_alias.alias, []
        return context_alias.alias, workloads

    async def fetch_workloads_by_alias(self) -> dict[str, list[WorkloadRecord]]:
        """Fetch workloads for every context concurrently."""
        logger.debug("Querying Kubernetes deployments concurrently...")
        results = await asyncio.gather(
            *(self._fetch_context_safe(context) for context in self.contexts)
        )

        workloads_by_alias: dict[str, list[WorkloadRecord]] = {}
        for alias, workloads in results:
            workloads_by_alias[alias] = workloads
            logger.info("Found %d deployments in %s", len(workloads), alias)
            for workload in workloads:
                logger.debug("\t- %s: %s", workload.app_name, workload.version)
        return workloads_by_alias

    # ------------------------------------------------------------------
    # Stage 2: releases per application
    # ------------------------------------------------------------------

    async def _fetch_releases_safe(
        self, fetcher: ReleaseFetcher, app_name: str
    ) -> tuple[str, list[ReleaseRecord]]:
        repository = self.repository_for(app_name)
        try:
            releases = await fetcher.fetch_releases(repository)
        except Exception as exc:
            logger.warning("Failed to get releases for %s: %s", repository, exc)
            return app_name, []
        return app_name, releases

    async def fetch_releases_by_app(
        self, app_names: Iterable[str]
    ) -> dict[str, list[ReleaseRecord]]:
        """Fetch release histories in batches bounded by the concurrency setting."""
        names = sorted(set(app_names))
        concurrency = self.settings.github.api.concurrency
        logger.debug("Using concurrency limit of %d for GitHub API calls", concurrency)

        owns_client = self._github_client is None
        client = self._github_client or self._build_github_client()
        fetcher = ReleaseFetcher(client, self.settings.github)

        releases_by_app: dict[str, list[ReleaseRecord]] = {}
        try:
            for batch in chunked(names, concurrency):
                results = await asyncio.gather(
                    *(self._fetch_releases_safe(fetcher, app_name) for app_name in batch)
                )
                releases_by_app.update(results)
        finally:
            if owns_client:
                await client.aclose()
        return releases_by_app

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def fetch_all(self) -> list[ApplicationDriftInfo]:
        """Run drift detection end to end.

        Returns:
            ApplicationDriftInfo list sorted by application name.

        Raises:
            NoApplicationsFoundError: If no context returned any workload.
        """
        started_at = time.perf_counter()
        logger.info("Starting drift analysis...")
        logger.info(
            "Contexts: %s",
            ", ".join(f"{c.context}={c.alias}" for c in self.contexts),
        )
        logger.info("Namespace: %s", self.namespace)

        workloads_by_alias = await self.fetch_workloads_by_alias()

        app_names = {
            workload.app_name
            for workloads in workloads_by_alias.values()
            for workload in workloads
        }
        logger.debug("Found %d unique applications across all contexts", len(app_names))
        if not app_names:
            raise NoApplicationsFoundError(self.namespace)

        logger.info("Querying GitHub releases for %d unique applications", len(app_names))
        releases_by_app = await self.fetch_releases_by_app(app_names)

        logger.info("Calculating version drift...")
        drift_infos = calculate_drift(workloads_by_alias, releases_by_app)
        logger.debug(
            "Drift analysis finished in %.2fs for %d applications",
            time.perf_counter() - started_at,
            len(drift_infos),
        )
        return drift_infos

    def to_dict(self) -> dict[str, Any]:
        """Describe the run parameters (for debug logging)."""
        return {
            "contexts": [c.model_dump() for c in self.contexts],
            "namespace": self.namespace,
            "service_mappings": dict(self._service_mappings),
            "concurrency": self.settings.github.api.concurrency,
        }
