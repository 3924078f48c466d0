"""Resource Descriptor Builder: pure assembly of the Function resource."""

from __future__ import annotations

from fndeploy.models.descriptor import (
    FunctionMetadata,
    FunctionSpec,
    ResourceDescriptor,
)
from fndeploy.models.functions import FunctionConfig, ResolvedArtifacts


def build_descriptor(
    function: FunctionConfig,
    artifacts: ResolvedArtifacts,
    namespace: str,
) -> ResourceDescriptor:
    """Build the Function resource for one deployment attempt.

    ``topic`` and ``type`` are fixed to the HTTP trigger defaults.
    """
    return ResourceDescriptor(
        metadata=FunctionMetadata(name=function.name, namespace=namespace),
        spec=FunctionSpec(
            deps=artifacts.deps_content,
            function=artifacts.handler_content,
            handler=function.handler,
            runtime=function.runtime,
        ),
    )
