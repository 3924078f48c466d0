"""Submission outcomes and the aggregate deployment report."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from fndeploy.models.states import FunctionTransition

AGGREGATE_ERROR_HEADER = "Found errors while deploying the given functions:"


class DeploymentFailedError(RuntimeError):
    """Raised when at least one function in a deployment failed."""


class SubmissionStatus(str, Enum):
    """How the cluster answered the create call."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


class SubmissionOutcome(BaseModel):
    """Classified result of a single create call.

    ``code`` and ``message`` are only meaningful for FAILED and carry the
    cluster-reported values verbatim.
    """

    model_config = ConfigDict(frozen=True)

    status: SubmissionStatus
    code: int | None = None
    message: str = ""

    @classmethod
    def created(cls) -> SubmissionOutcome:
        return cls(status=SubmissionStatus.CREATED)

    @classmethod
    def already_exists(cls) -> SubmissionOutcome:
        return cls(status=SubmissionStatus.ALREADY_EXISTS)

    @classmethod
    def failed(cls, code: int | None, message: str) -> SubmissionOutcome:
        return cls(status=SubmissionStatus.FAILED, code=code, message=message)


class PodIdentity(BaseModel):
    """The workload pod found for a freshly created function."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    labels: dict[str, str] = {}


class FunctionResult(BaseModel):
    """Terminal record of one function's deployment.

    ``outcome`` is None when the function never reached the cluster
    (unsupported runtime or missing handler source).
    """

    model_config = ConfigDict(frozen=True)

    function_name: str
    status: SubmissionStatus
    outcome: SubmissionOutcome | None = None
    pod: PodIdentity | None = None
    error: str | None = None
    transitions: list[FunctionTransition] = []

    @property
    def failed(self) -> bool:
        return self.status == SubmissionStatus.FAILED


class DeploymentReport(BaseModel):
    """Aggregate of every function's terminal result.

    Success only when no function failed; an already-deployed function
    does not count as a failure.
    """

    model_config = ConfigDict(frozen=True)

    results: list[FunctionResult] = []
    total: int = 0

    @property
    def completed(self) -> int:
        return len(self.results)

    @property
    def errors(self) -> list[str]:
        return [r.error or "" for r in self.results if r.failed]

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def error_message(self) -> str:
        """Newline-joined failure text, or an empty string on success."""
        if self.succeeded:
            return ""
        return "\n".join([AGGREGATE_ERROR_HEADER, *self.errors])

    def get(self, function_name: str) -> FunctionResult | None:
        for result in self.results:
            if result.function_name == function_name:
                return result
        return None

    def raise_for_failure(self) -> None:
        """Raise DeploymentFailedError carrying the aggregate message."""
        if not self.succeeded:
            raise DeploymentFailedError(self.error_message)
