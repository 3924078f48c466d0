"""Function input models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FunctionConfig(BaseModel):
    """A single function as declared by the deployment pipeline.

    ``handler`` is a ``module.entrypoint`` reference; the first dot-segment
    names the source file that holds the entrypoint.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    handler: str
    runtime: str


class ArtifactPair(BaseModel):
    """Relative paths of the two files a function deployment needs."""

    model_config = ConfigDict(frozen=True)

    handler_path: str
    deps_path: str


class ResolvedArtifacts(BaseModel):
    """Text content of the handler source and its dependency manifest.

    ``deps_content`` is empty when the function ships no manifest.
    """

    model_config = ConfigDict(frozen=True)

    handler_content: str
    deps_content: str = ""
