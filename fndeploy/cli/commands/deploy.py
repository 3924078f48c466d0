"""``fndeploy deploy`` — deploy the functions of a service.

Reads the service file, resolves each function's handler source and
dependency manifest (from the package archive when there is one, from the
service directory otherwise), creates the Function resources and reports
the outcome per function.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
from kubernetes.config import ConfigException
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fndeploy.config import settings
from fndeploy.core.cluster import ClusterApi, KubernetesCluster
from fndeploy.core.orchestrator import Deployer
from fndeploy.models.outcomes import DeploymentReport, SubmissionStatus
from fndeploy.service import ServiceDefinitionError, load_service

logger = logging.getLogger(__name__)

console = Console()

UNSUPPORTED_OPTIONS = ("stage", "region")

_STATUS_STYLE = {
    SubmissionStatus.CREATED: "[green]created[/green]",
    SubmissionStatus.ALREADY_EXISTS: "[yellow]already deployed[/yellow]",
    SubmissionStatus.FAILED: "[red]failed[/red]",
}


def warn_unsupported_options(options: dict[str, Any]) -> list[str]:
    """Warn about every supplied option this deployer ignores.

    Returns the names that were warned about.
    """
    warned = []
    for name in UNSUPPORTED_OPTIONS:
        if options.get(name):
            logger.warning(
                "Warning: Option %s is not supported for the kubeless plugin", name
            )
            warned.append(name)
    return warned


def make_cluster(namespace: str | None) -> ClusterApi:
    """Build the cluster handle from settings."""
    return KubernetesCluster(
        namespace=namespace,
        kubeconfig=settings.kubeconfig,
        context=settings.context,
        in_cluster=settings.in_cluster,
        api_version=settings.function_api_version,
    )


def render_report(report: DeploymentReport) -> None:
    table = Table(title=f"Deployed {report.completed}/{report.total} functions")
    table.add_column("Function", style="cyan")
    table.add_column("Result")
    table.add_column("Pod", style="dim")

    for result in report.results:
        pod = result.pod.name if result.pod else "-"
        table.add_row(result.function_name, _STATUS_STYLE[result.status], pod)

    console.print(table)


def deploy_cmd(
    config_file: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the service file (defaults to FNDEPLOY_SERVICE_FILE or serverless.yml).",
    ),
    function: str = typer.Option(
        None,
        "--function",
        "-f",
        help="Deploy only this function.",
    ),
    package: Path = typer.Option(
        None,
        "--package",
        "-p",
        help="Zip archive holding the packaged service.",
    ),
    namespace: str = typer.Option(
        None,
        "--namespace",
        "-n",
        help="Target namespace (defaults to the kubeconfig context's namespace).",
    ),
    stage: str = typer.Option(None, "--stage", "-s", help="Not supported; ignored."),
    region: str = typer.Option(None, "--region", "-r", help="Not supported; ignored."),
    verify: bool = typer.Option(
        settings.verify_pods,
        "--verify/--no-verify",
        help="Look up the function's pod after deploying.",
    ),
) -> None:
    """Deploy the functions declared in a service file.

    An already-deployed function is reported and left untouched; remove it
    first to deploy it again.
    """
    warn_unsupported_options({"stage": stage, "region": region})

    service_file = config_file or settings.service_file
    try:
        service = load_service(service_file)
        functions = service.function_configs(only=function)
    except ServiceDefinitionError as exc:
        console.print(f"[bold red]Invalid service:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    package_path = package or settings.package_path or service.package_path()

    try:
        cluster = make_cluster(namespace or settings.namespace)
    except ConfigException as exc:
        console.print(f"[bold red]Cannot load cluster configuration:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    deployer = Deployer(cluster, verify=verify)
    report = deployer.deploy_all(
        functions,
        package_path=package_path,
        service_root=service.root,
    )

    render_report(report)

    if not report.succeeded:
        console.print(f"[bold red]{escape(report.error_message)}[/bold red]")
        raise typer.Exit(code=1)
