"""Workload fetcher - lists Deployments and Rollouts from one Kubernetes cluster."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from kubedrift.constants.enums import WorkloadKind
from kubedrift.controllers.workloads.errors import (
    KubernetesConnectionError,
    KubernetesDecodeError,
    KubernetesRequestError,
)
from kubedrift.controllers.workloads.parsers.workload_parser import (
    WorkloadParser,
    build_label_selector,
)
from kubedrift.models.core.workload_info import WorkloadRecord

logger = logging.getLogger(__name__)


class WorkloadFetcher:
    """Fetches workload resources of one kind from a Kubernetes API server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        context: str,
        parser: WorkloadParser | None = None,
    ) -> None:
        """Initialize workload fetcher.

        Args:
            client: HTTP client bound to the cluster's API server
            context: Kubernetes context name, recorded on every workload
            parser: Parser used to normalize list items
        """
        self._client = client
        self.context = context
        self._parser = parser or WorkloadParser()

    async def fetch_items_raw(
        self,
        namespace: str,
        selector: list[dict[str, list[str]]] | None,
        kind: WorkloadKind,
    ) -> list[dict[str, Any]]:
        """Fetch raw list items for one kind.

        A 404 means the resource kind is not served by this cluster and
        yields an empty list.
        """
        path = kind.list_path(namespace)
        params: dict[str, str] = {}
        label_selector = build_label_selector(selector)
        if label_selector:
            params["labelSelector"] = label_selector

        logger.debug(
            "Listing %s in namespace [%s] on %s with selector [%s]",
            kind.plural,
            namespace,
            self.context,
            label_selector,
        )
        try:
            response = await self._client.get(
                path,
                params=params,
                headers={"Accept": "application/json"},
            )
        except httpx.TransportError as exc:
            raise KubernetesConnectionError(path, str(exc) or type(exc).__name__) from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("%s not available on %s (404)", kind.plural, self.context)
            return []
        if response.status_code != httpx.codes.OK:
            raise KubernetesRequestError(path, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise KubernetesDecodeError(kind.display_name, path, str(exc)) from exc

        items = data.get("items") if isinstance(data, dict) else None
        if items is None:
            # "items": null is how the API server encodes an empty list
            if isinstance(data, dict) and "items" in data:
                return []
            raise KubernetesDecodeError(kind.display_name, path, "missing 'items'")
        if not isinstance(items, list):
            raise KubernetesDecodeError(kind.display_name, path, "'items' is not a list")
        return items

    async def fetch_workloads(
        self,
        namespace: str,
        selector: list[dict[str, list[str]]] | None,
        kind: WorkloadKind,
    ) -> list[WorkloadRecord]:
        """Fetch and normalize workloads of one kind.

        Args:
            namespace: Namespace to list
            selector: Label selector items (ANDed), each mapping a key to values (ORed)
            kind: Resource kind to list

        Returns:
            List of WorkloadRecord objects.
        """
        items = await self.fetch_items_raw(namespace, selector, kind)
        path = kind.list_path(namespace)
        try:
            workloads = self._parser.parse_workloads(items, context=self.context, kind=kind)
        except (AttributeError, TypeError, ValueError) as exc:
            raise KubernetesDecodeError(kind.display_name, path, str(exc)) from exc

        logger.debug("Found %d %s on %s", len(workloads), kind.plural, self.context)
        return workloads
