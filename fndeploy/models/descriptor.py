"""Function custom resource descriptor — the body submitted to the cluster."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

FUNCTION_API_VERSION = "k8s.io/v1"
FUNCTION_KIND = "Function"
FUNCTION_PLURAL = "functions"

# HTTP is the only trigger this deployer knows how to wire up.
DEFAULT_TRIGGER_TYPE = "HTTP"
DEFAULT_TOPIC = ""


class FunctionMetadata(BaseModel):
    """Name and namespace of the Function resource."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str


class FunctionSpec(BaseModel):
    """The ``spec`` block of a Function resource."""

    model_config = ConfigDict(frozen=True)

    deps: str
    function: str
    handler: str
    runtime: str
    topic: str = DEFAULT_TOPIC
    type: str = DEFAULT_TRIGGER_TYPE


class ResourceDescriptor(BaseModel):
    """Immutable Function resource, built once per deployment attempt."""

    model_config = ConfigDict(frozen=True)

    api_version: str = FUNCTION_API_VERSION
    kind: str = FUNCTION_KIND
    metadata: FunctionMetadata
    spec: FunctionSpec

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_body(self) -> dict[str, Any]:
        """Render the wire representation expected by the cluster API."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.model_dump(),
            "spec": self.spec.model_dump(),
        }
