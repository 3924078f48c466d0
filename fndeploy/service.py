"""Service definition — the ``serverless.yml`` that declares the functions.

Only the parts this deployer reads are modelled::

    service: hello
    provider:
      name: kubeless
      runtime: python2.7
    functions:
      hello:
        handler: handler.hello
    package:
      path: .serverless/hello.zip   # optional

The service root (where plain files are read from) is the directory that
holds the service file.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from fndeploy.models.functions import FunctionConfig


class ServiceDefinitionError(RuntimeError):
    """Raised when the service file is missing, malformed, or incomplete."""


class ProviderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "kubeless"
    runtime: str


class FunctionEntry(BaseModel):
    """One entry of the ``functions`` map; ``runtime`` overrides the provider's."""

    model_config = ConfigDict(frozen=True)

    handler: str
    runtime: str | None = None


class PackageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str | None = None


class ServiceDefinition(BaseModel):
    """A parsed service file."""

    model_config = ConfigDict(frozen=True)

    service: str
    provider: ProviderConfig
    functions: dict[str, FunctionEntry] = {}
    package: PackageConfig = PackageConfig()
    root: Path = Path(".")

    def function_configs(self, only: str | None = None) -> list[FunctionConfig]:
        """Build the FunctionConfig set, optionally narrowed to one function."""
        names = list(self.functions)
        if only is not None:
            if only not in self.functions:
                raise ServiceDefinitionError(
                    f"Function {only!r} is not defined in service {self.service!r}. "
                    f"Defined: {', '.join(names) or 'none'}"
                )
            names = [only]
        return [
            FunctionConfig(
                name=name,
                handler=self.functions[name].handler,
                runtime=self.functions[name].runtime or self.provider.runtime,
            )
            for name in names
        ]

    def package_path(self) -> Path | None:
        """The packaged archive declared in the service file, if any."""
        if not self.package.path:
            return None
        return self.root / self.package.path


def load_service(path: Path | str) -> ServiceDefinition:
    """Parse the service file at *path*."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ServiceDefinitionError(f"Cannot read service file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ServiceDefinitionError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ServiceDefinitionError(f"Service file {path} must contain a mapping")

    try:
        return ServiceDefinition.model_validate({**raw, "root": path.parent})
    except ValidationError as exc:
        raise ServiceDefinitionError(f"Invalid service file {path}: {exc}") from exc
