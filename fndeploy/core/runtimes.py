"""Runtime support policy.

Maps a declared runtime tag onto the file names a function deployment
needs. Only runtimes matching a registered family are deployable; anything
else is rejected before any file is read.
"""

from __future__ import annotations

import re
from pathlib import PureWindowsPath

from pydantic import BaseModel, ConfigDict

from fndeploy.models.functions import ArtifactPair, FunctionConfig


class UnsupportedRuntimeError(RuntimeError):
    """Raised when a function declares a runtime with no registered family."""

    def __init__(self, runtime: str) -> None:
        families = ", ".join(p.family for p in SUPPORTED_RUNTIMES)
        super().__init__(
            f"Unsupported runtime: the runtime {runtime} is not supported yet "
            f"(supported: {families})"
        )
        self.runtime = runtime


class InvalidHandlerError(ValueError):
    """Raised when a handler reference names a file outside the service root."""

    def __init__(self, handler: str) -> None:
        super().__init__(
            f"Invalid handler {handler}: the handler file must be a relative "
            "path inside the service"
        )
        self.handler = handler


class RuntimeProfile(BaseModel):
    """File naming rules for one runtime family."""

    model_config = ConfigDict(frozen=True)

    family: str
    pattern: str  # regex searched within the runtime tag
    extension: str
    deps_file: str

    def matches(self, runtime: str) -> bool:
        return re.search(self.pattern, runtime) is not None


SUPPORTED_RUNTIMES: list[RuntimeProfile] = [
    RuntimeProfile(
        family="python",
        pattern="python",
        extension=".py",
        deps_file="requirements.txt",
    ),
]


def profile_for(runtime: str) -> RuntimeProfile:
    """Return the profile handling *runtime*, or raise UnsupportedRuntimeError."""
    for profile in SUPPORTED_RUNTIMES:
        if profile.matches(runtime):
            return profile
    raise UnsupportedRuntimeError(runtime)


def _is_contained(module: str) -> bool:
    # PureWindowsPath splits on both separators and reports drives and roots.
    path = PureWindowsPath(module)
    return not path.anchor and ".." not in path.parts


def artifact_pair_for(function: FunctionConfig) -> ArtifactPair:
    """Derive the handler source and dependency manifest paths.

    ``foo.bar.handler`` on a Python runtime yields ``foo.py`` and
    ``requirements.txt``. Raises ``InvalidHandlerError`` when the handler
    file would resolve outside the archive or service root.
    """
    profile = profile_for(function.runtime)
    module = function.handler.split(".")[0]
    if not _is_contained(module):
        raise InvalidHandlerError(function.handler)
    return ArtifactPair(
        handler_path=f"{module}{profile.extension}",
        deps_path=profile.deps_file,
    )
