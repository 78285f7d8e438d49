"""Kubeconfig credential resolution.

Resolves a kubeconfig context into the API server URL, authentication
material and TLS trust needed to talk to the cluster directly over HTTPS,
and builds the matching httpx client.

Supported authentication, in order of preference:
- basic auth (username/password)
- bearer token (inline or token file)
- client certificate (files or inline base64 data)
- exec credential plugins (e.g. aws eks get-token)
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import ssl
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
import yaml

from kubedrift.constants.defaults import KUBECONFIG_PATH_DEFAULT
from kubedrift.constants.timeouts import EXEC_CREDENTIAL_TIMEOUT, HTTP_REQUEST_TIMEOUT
from kubedrift.constants.values import USER_AGENT

logger = logging.getLogger(__name__)


class KubeConfigError(Exception):
    """Raised when a context cannot be resolved into client settings."""


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str


@dataclass(frozen=True)
class BearerTokenAuth:
    token: str


@dataclass(frozen=True)
class ClientCertificateAuth:
    """Client certificate and key, as PEM text."""

    certificate_pem: str
    key_pem: str


KubeAuth = BasicAuth | BearerTokenAuth | ClientCertificateAuth


@dataclass(frozen=True)
class KubeClientConfig:
    """Resolved connection settings for one cluster context."""

    server: str
    auth: KubeAuth
    namespace: str = "default"
    ca_pem: str | None = None
    insecure_skip_tls_verify: bool = False


def default_kubeconfig_path() -> Path:
    """Return the first path listed in KUBECONFIG, else ~/.kube/config."""
    env_value = os.environ.get("KUBECONFIG", "")
    for candidate in env_value.split(os.pathsep):
        if candidate.strip():
            return Path(candidate.strip()).expanduser()
    return Path(KUBECONFIG_PATH_DEFAULT).expanduser()


def load_kubeconfig(path: str | Path | None = None) -> dict[str, Any]:
    """Load a kubeconfig file.

    Raises:
        KubeConfigError: If the file is missing or not a YAML mapping.
    """
    kubeconfig_path = Path(path).expanduser() if path else default_kubeconfig_path()
    try:
        with kubeconfig_path.open(encoding="utf-8") as handle:
            content = yaml.safe_load(handle)
    except OSError as exc:
        raise KubeConfigError(f"No kubeconfig found at {kubeconfig_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise KubeConfigError(f"Invalid kubeconfig {kubeconfig_path}: {exc}") from exc

    if not isinstance(content, dict):
        raise KubeConfigError(f"Invalid kubeconfig {kubeconfig_path}: not a mapping")
    content.setdefault("__path__", str(kubeconfig_path))
    return content


def _find_named(entries: list[dict[str, Any]] | None, name: str, section: str) -> dict[str, Any]:
    for entry in entries or []:
        if entry.get("name") == name:
            return entry.get(section) or {}
    raise KubeConfigError(f"No {section} named '{name}' in kubeconfig")


def _resolve_path(value: str, base_dir: Path | None) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path


def _read_text(value: str, base_dir: Path | None, what: str) -> str:
    path = _resolve_path(value, base_dir)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise KubeConfigError(f"Cannot read {what} {path}: {exc}") from exc


def _decode_data(value: str, what: str) -> str:
    try:
        return base64.b64decode(value).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise KubeConfigError(f"Invalid base64 {what}: {exc}") from exc


def _run_exec_plugin(exec_config: dict[str, Any]) -> str:
    """Run an exec credential plugin and return its bearer token."""
    command = exec_config.get("command")
    if not command:
        raise KubeConfigError("Exec credential plugin has no command")
    args = [command, *(exec_config.get("args") or [])]
    env = dict(os.environ)
    for item in exec_config.get("env") or []:
        if item.get("name"):
            env[item["name"]] = str(item.get("value", ""))

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            env=env,
            timeout=EXEC_CREDENTIAL_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise KubeConfigError(f"Exec credential plugin '{command}' failed: {exc}") from exc

    if result.returncode != 0:
        raise KubeConfigError(
            f"Exec credential plugin '{command}' exited with {result.returncode}: "
            f"{(result.stderr or '').strip()}"
        )
    try:
        credential = json.loads(result.stdout)
        token = credential["status"]["token"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise KubeConfigError(f"Exec credential plugin '{command}' returned no token") from exc
    return str(token)


def resolve_auth(user: dict[str, Any], base_dir: Path | None = None) -> KubeAuth:
    """Build the authentication scheme for a kubeconfig user entry."""
    if user.get("username") and user.get("password"):
        return BasicAuth(username=str(user["username"]), password=str(user["password"]))

    if user.get("token"):
        return BearerTokenAuth(token=str(user["token"]).strip())

    if user.get("tokenFile"):
        return BearerTokenAuth(token=_read_text(user["tokenFile"], base_dir, "token file").strip())

    if user.get("client-certificate") and user.get("client-key"):
        return ClientCertificateAuth(
            certificate_pem=_read_text(user["client-certificate"], base_dir, "client certificate"),
            key_pem=_read_text(user["client-key"], base_dir, "client key"),
        )

    if user.get("client-certificate-data") and user.get("client-key-data"):
        return ClientCertificateAuth(
            certificate_pem=_decode_data(user["client-certificate-data"], "client certificate"),
            key_pem=_decode_data(user["client-key-data"], "client key"),
        )

    if user.get("exec"):
        return BearerTokenAuth(token=_run_exec_plugin(user["exec"]))

    raise KubeConfigError("User entry has no supported authentication method")


def resolve_client_config(kubeconfig: dict[str, Any], context: str) -> KubeClientConfig:
    """Resolve one named context into client settings.

    Args:
        kubeconfig: Decoded kubeconfig document
        context: Context name to resolve

    Raises:
        KubeConfigError: If the context, its cluster or its user is unusable.
    """
    source = kubeconfig.get("__path__")
    base_dir = Path(source).parent if source else None

    context_entry = _find_named(kubeconfig.get("contexts"), context, "context")
    cluster = _find_named(kubeconfig.get("clusters"), context_entry.get("cluster", ""), "cluster")
    user = _find_named(kubeconfig.get("users"), context_entry.get("user", ""), "user")

    server = cluster.get("server")
    if not server:
        raise KubeConfigError(f"Cluster for context '{context}' has no server URL")

    ca_pem: str | None = None
    if cluster.get("certificate-authority"):
        ca_pem = _read_text(cluster["certificate-authority"], base_dir, "certificate authority")
    elif cluster.get("certificate-authority-data"):
        ca_pem = _decode_data(cluster["certificate-authority-data"], "certificate authority")

    return KubeClientConfig(
        server=str(server).rstrip("/"),
        auth=resolve_auth(user, base_dir),
        namespace=context_entry.get("namespace") or "default",
        ca_pem=ca_pem,
        insecure_skip_tls_verify=bool(cluster.get("insecure-skip-tls-verify", False)),
    )


def build_ssl_context(config: KubeClientConfig) -> ssl.SSLContext:
    """Build the TLS context for the cluster connection."""
    if config.insecure_skip_tls_verify:
        logger.warning("TLS verification disabled for %s", config.server)
        context: ssl.SSLContext = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    elif config.ca_pem:
        context = ssl.create_default_context(cadata=config.ca_pem)
    else:
        context = ssl.create_default_context()

    if isinstance(config.auth, ClientCertificateAuth):
        # load_cert_chain only accepts file paths
        with tempfile.TemporaryDirectory(prefix="kubedrift-") as tmp_dir:
            cert_path = Path(tmp_dir) / "client.crt"
            key_path = Path(tmp_dir) / "client.key"
            cert_path.write_text(config.auth.certificate_pem, encoding="utf-8")
            key_path.write_text(config.auth.key_pem, encoding="utf-8")
            key_path.chmod(0o600)
            context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))
    return context


def build_kube_client(config: KubeClientConfig) -> httpx.AsyncClient:
    """Create an HTTP client bound to the cluster's API server."""
    headers = {"User-Agent": USER_AGENT}
    auth: httpx.Auth | None = None
    if isinstance(config.auth, BasicAuth):
        auth = httpx.BasicAuth(config.auth.username, config.auth.password)
    elif isinstance(config.auth, BearerTokenAuth):
        headers["Authorization"] = f"Bearer {config.auth.token}"

    return httpx.AsyncClient(
        base_url=config.server,
        headers=headers,
        auth=auth,
        verify=build_ssl_context(config),
        timeout=httpx.Timeout(HTTP_REQUEST_TIMEOUT),
        follow_redirects=True,
    )
