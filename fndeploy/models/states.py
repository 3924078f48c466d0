"""Per-function deployment state model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FunctionState(str, Enum):
    """Where a single function is in its deployment pipeline."""

    PENDING = "pending"
    RESOLVING = "resolving"
    BUILDING = "building"
    SUBMITTING = "submitting"
    VERIFYING = "verifying"
    DONE = "done"


# Any active state may short-circuit to DONE on failure.
# DONE is terminal.
VALID_TRANSITIONS: dict[FunctionState, set[FunctionState]] = {
    FunctionState.PENDING: {FunctionState.RESOLVING},
    FunctionState.RESOLVING: {FunctionState.BUILDING, FunctionState.DONE},
    FunctionState.BUILDING: {FunctionState.SUBMITTING, FunctionState.DONE},
    FunctionState.SUBMITTING: {FunctionState.VERIFYING, FunctionState.DONE},
    FunctionState.VERIFYING: {FunctionState.DONE},
    FunctionState.DONE: set(),
}


class FunctionTransition(BaseModel):
    """A single recorded state change."""

    model_config = ConfigDict(frozen=True)

    function_name: str
    from_state: FunctionState
    to_state: FunctionState
