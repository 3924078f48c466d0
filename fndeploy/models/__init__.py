"""fndeploy data models — all Pydantic v2, all frozen (immutable)."""

from fndeploy.models.descriptor import (
    DEFAULT_TOPIC,
    DEFAULT_TRIGGER_TYPE,
    FUNCTION_API_VERSION,
    FUNCTION_KIND,
    FUNCTION_PLURAL,
    FunctionMetadata,
    FunctionSpec,
    ResourceDescriptor,
)
from fndeploy.models.functions import ArtifactPair, FunctionConfig, ResolvedArtifacts
from fndeploy.models.outcomes import (
    DeploymentFailedError,
    DeploymentReport,
    FunctionResult,
    PodIdentity,
    SubmissionOutcome,
    SubmissionStatus,
)
from fndeploy.models.states import VALID_TRANSITIONS, FunctionState, FunctionTransition

__all__ = [
    # functions
    "FunctionConfig",
    "ArtifactPair",
    "ResolvedArtifacts",
    # descriptor
    "FUNCTION_API_VERSION",
    "FUNCTION_KIND",
    "FUNCTION_PLURAL",
    "DEFAULT_TOPIC",
    "DEFAULT_TRIGGER_TYPE",
    "FunctionMetadata",
    "FunctionSpec",
    "ResourceDescriptor",
    # states
    "FunctionState",
    "FunctionTransition",
    "VALID_TRANSITIONS",
    # outcomes
    "SubmissionStatus",
    "SubmissionOutcome",
    "PodIdentity",
    "FunctionResult",
    "DeploymentReport",
    "DeploymentFailedError",
]
