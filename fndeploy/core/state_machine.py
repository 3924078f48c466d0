"""Per-function deployment state machine.

Enforces the ``VALID_TRANSITIONS`` table and records every transition so
the final result carries the path a function took.
"""

from __future__ import annotations

from fndeploy.models.states import (
    VALID_TRANSITIONS,
    FunctionState,
    FunctionTransition,
)


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class FunctionStateMachine:
    """Tracks one function from PENDING to DONE.

    Parameters
    ----------
    function_name:
        The function this machine tracks.
    """

    def __init__(self, function_name: str) -> None:
        self._function_name = function_name
        self._state = FunctionState.PENDING
        self._transitions: list[FunctionTransition] = []

    @property
    def state(self) -> FunctionState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS[self._state]

    @property
    def transitions(self) -> list[FunctionTransition]:
        return list(self._transitions)

    def transition(self, target: FunctionState) -> FunctionTransition:
        """Move to *target*, raising InvalidTransitionError if not allowed."""
        allowed = VALID_TRANSITIONS.get(self._state, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition {self._function_name} from {self._state.value} "
                f"to {target.value}. Allowed: {sorted(s.value for s in allowed)}"
            )
        record = FunctionTransition(
            function_name=self._function_name,
            from_state=self._state,
            to_state=target,
        )
        self._transitions.append(record)
        self._state = target
        return record
