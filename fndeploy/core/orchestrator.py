"""Deployment orchestrator — drives every function to a terminal state.

Per function::

    PENDING -> RESOLVING -> BUILDING -> SUBMITTING -> (VERIFYING) -> DONE

An unsupported runtime, an invalid handler reference or an unreadable
handler source short-circuits to DONE as a failure without touching the
cluster. An already-deployed Function is reported but is not a failure.
Results are aggregated only after every function is DONE.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from fndeploy.core.archive import ZipArchive, load_archive
from fndeploy.core.artifact_source import (
    ArchiveCache,
    ArtifactNotFoundError,
    ArtifactSource,
    resolve_artifacts,
    select_source,
)
from fndeploy.core.cluster import ClusterApi
from fndeploy.core.descriptor_builder import build_descriptor
from fndeploy.core.runtimes import InvalidHandlerError, UnsupportedRuntimeError
from fndeploy.core.state_machine import FunctionStateMachine
from fndeploy.core.submitter import failure_message, submit
from fndeploy.core.verifier import verify as verify_pod
from fndeploy.models.functions import FunctionConfig
from fndeploy.models.outcomes import (
    DeploymentReport,
    FunctionResult,
    SubmissionStatus,
)
from fndeploy.models.states import FunctionState

logger = logging.getLogger(__name__)


class Deployer:
    """Deploys a set of functions into one cluster namespace.

    Parameters
    ----------
    cluster:
        The cluster handle resources are created through.
    namespace:
        Target namespace. Defaults to the cluster's own default namespace.
    verify:
        Look for the function's pod after a successful create.
    archive_loader:
        Parses archive bytes. Each ``deploy_all`` call memoizes its results
        in a fresh ``ArchiveCache``.
    """

    def __init__(
        self,
        cluster: ClusterApi,
        *,
        namespace: str | None = None,
        verify: bool = True,
        archive_loader: Callable[[bytes], ZipArchive] = load_archive,
    ) -> None:
        self._cluster = cluster
        self._namespace = namespace
        self._verify = verify
        self._archive_loader = archive_loader

    @property
    def namespace(self) -> str:
        return self._namespace or self._cluster.namespace

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def deploy_all(
        self,
        functions: Iterable[FunctionConfig],
        package_path: Path | str | None = None,
        service_root: Path | str | None = None,
    ) -> DeploymentReport:
        """Deploy every function and return the aggregate report.

        The artifact source is chosen once for the whole run.
        """
        functions = list(functions)
        cache = ArchiveCache(self._archive_loader)
        source = select_source(package_path, service_root, cache)

        results = [self.deploy_function(function, source) for function in functions]
        report = DeploymentReport(results=results, total=len(functions))

        if report.succeeded:
            logger.debug("Deployed %d/%d functions", report.completed, report.total)
        else:
            logger.error(
                "%d of %d functions failed to deploy",
                len(report.errors),
                report.total,
            )
        return report

    # ------------------------------------------------------------------
    # Single function
    # ------------------------------------------------------------------

    def deploy_function(
        self, function: FunctionConfig, source: ArtifactSource
    ) -> FunctionResult:
        """Run one function through resolve, build, submit and verify."""
        machine = FunctionStateMachine(function.name)

        machine.transition(FunctionState.RESOLVING)
        try:
            artifacts = resolve_artifacts(function, source)
        except (
            UnsupportedRuntimeError,
            InvalidHandlerError,
            ArtifactNotFoundError,
        ) as exc:
            error = f"Unable to deploy the function {function.name}: {exc}"
            logger.error("%s", error)
            machine.transition(FunctionState.DONE)
            return FunctionResult(
                function_name=function.name,
                status=SubmissionStatus.FAILED,
                error=error,
                transitions=machine.transitions,
            )

        machine.transition(FunctionState.BUILDING)
        descriptor = build_descriptor(function, artifacts, self.namespace)

        machine.transition(FunctionState.SUBMITTING)
        outcome = submit(descriptor, self._cluster)

        pod = None
        error = None
        if outcome.status == SubmissionStatus.CREATED:
            if self._verify:
                machine.transition(FunctionState.VERIFYING)
                pod = verify_pod(function.name, self._cluster, descriptor.namespace)
            logger.info("Function %s successfully deployed", function.name)
        elif outcome.status == SubmissionStatus.FAILED:
            error = failure_message(function.name, outcome)
            logger.error("%s", error)

        machine.transition(FunctionState.DONE)
        return FunctionResult(
            function_name=function.name,
            status=outcome.status,
            outcome=outcome,
            pod=pod,
            error=error,
            transitions=machine.transitions,
        )


def deploy_all(
    functions: Iterable[FunctionConfig],
    cluster: ClusterApi,
    package_path: Path | str | None = None,
    service_root: Path | str | None = None,
    *,
    namespace: str | None = None,
    verify: bool = True,
) -> DeploymentReport:
    """Convenience wrapper: ``Deployer(cluster).deploy_all(...)``."""
    deployer = Deployer(cluster, namespace=namespace, verify=verify)
    return deployer.deploy_all(functions, package_path, service_root)
