"""Command-line entry point for kubedrift using Cyclopts.

Parses and validates arguments, configures logging, runs the drift
controller and prints the report.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import cyclopts
from rich.console import Console
from rich.logging import RichHandler

from kubedrift.constants.defaults import CONFIG_PATH_DEFAULT, LOG_LEVEL_DEFAULT
from kubedrift.constants.enums import LogLevel
from kubedrift.constants.values import APP_NAME, APP_VERSION
from kubedrift.controllers.drift import DriftController, DriftError
from kubedrift.models.core.context_alias import ContextAlias
from kubedrift.models.state.config_manager import ConfigError, ConfigManager
from kubedrift.utils.report_generator import DriftReportGenerator

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json")

app = cyclopts.App(
    name=APP_NAME,
    help="Detect version drift between Kubernetes deployments and GitHub releases",
    version=APP_VERSION,
)


class CliValidationError(ValueError):
    """Raised when command-line arguments are invalid."""


@dataclass(frozen=True)
class RunArguments:
    """Validated command-line arguments."""

    contexts: list[ContextAlias]
    namespace: str
    github_token: str
    config_path: str
    kubeconfig_path: str | None
    output: str


def parse_log_level(value: str) -> int:
    """Map a log level name onto a logging level, defaulting to INFO."""
    try:
        level = LogLevel(value.strip().lower())
    except ValueError:
        return logging.INFO
    return getattr(logging, level.name)


def configure_logging(level_name: str) -> None:
    """Install a rich stderr handler at the requested level."""
    level = parse_log_level(level_name)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def validate_arguments(
    contexts: Sequence[str] | None,
    namespace: str | None,
    github_token: str | None,
    config: str,
    kubeconfig: str | None,
    output: str,
) -> RunArguments:
    """Validate raw arguments.

    Raises:
        CliValidationError: With a user-facing message.
    """
    if not contexts:
        raise CliValidationError("At least one context must be specified with --context")
    if not namespace or not namespace.strip():
        raise CliValidationError("Namespace must be specified with --namespace")

    parsed: list[ContextAlias] = []
    for value in contexts:
        try:
            context_alias = ContextAlias.parse(value)
        except ValueError as exc:
            raise CliValidationError(str(exc)) from exc
        if any(existing.alias == context_alias.alias for existing in parsed):
            raise CliValidationError(f"Duplicate context alias: {context_alias.alias}")
        parsed.append(context_alias)

    token = github_token or os.environ.get("GITHUB_TOKEN", "")
    if not token.strip():
        raise CliValidationError(
            "GitHub token must be provided via --github-token or GITHUB_TOKEN environment variable"
        )

    if output not in OUTPUT_FORMATS:
        raise CliValidationError(
            f"Output format must be one of {', '.join(OUTPUT_FORMATS)}, got: {output}"
        )

    return RunArguments(
        contexts=parsed,
        namespace=namespace.strip(),
        github_token=token.strip(),
        config_path=config,
        kubeconfig_path=kubeconfig,
        output=output,
    )


async def run_drift_detection(arguments: RunArguments) -> DriftReportGenerator:
    """Load settings, run the controller and build the report.

    Raises:
        ConfigError: If the settings file cannot be used.
        DriftError: If the run finds no applications.
    """
    logger.info("Loading configuration from %s", arguments.config_path)
    settings = ConfigManager(arguments.config_path).load()

    controller = DriftController(
        arguments.contexts,
        arguments.namespace,
        settings,
        arguments.github_token,
        kubeconfig_path=arguments.kubeconfig_path,
    )
    logger.debug("Run parameters: %s", controller.to_dict())
    drift_infos = await controller.fetch_all()
    return DriftReportGenerator(
        drift_infos,
        controller.context_aliases,
        settings.github.tag_history_count,
    )


@app.default
def run(
    *,
    context: list[str] | None = None,
    namespace: str | None = None,
    github_token: str | None = None,
    config: str = CONFIG_PATH_DEFAULT,
    kubeconfig: str | None = None,
    log_level: str = LOG_LEVEL_DEFAULT,
    output: str = "table",
) -> None:
    """Report how far deployed versions lag behind upstream releases.

    Args:
        context: Kubernetes context with alias as 'context=alias'. Repeatable.
        namespace: Kubernetes namespace to inspect.
        github_token: GitHub token (defaults to the GITHUB_TOKEN environment variable).
        config: Path to the YAML configuration file.
        kubeconfig: Path to the kubeconfig file (defaults to KUBECONFIG or ~/.kube/config).
        log_level: Logging level (debug, info, warning, error, critical).
        output: Report format, 'table' or 'json'.
    """
    configure_logging(log_level)
    err_console = Console(stderr=True)

    try:
        arguments = validate_arguments(
            context, namespace, github_token, config, kubeconfig, output
        )
    except CliValidationError as exc:
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        sys.exit(1)

    try:
        report = asyncio.run(run_drift_detection(arguments))
    except (ConfigError, DriftError) as exc:
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        sys.exit(1)

    if arguments.output == "json":
        print(report.generate_json_report())
    else:
        report.render(Console())


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
