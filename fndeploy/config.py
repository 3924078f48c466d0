"""Runtime configuration: env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
FNDEPLOY_* environment variables; CLI options take precedence over both.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from fndeploy.models.descriptor import FUNCTION_API_VERSION


class DeploySettings(BaseSettings):
    """Deployment settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FNDEPLOY_NAMESPACE=functions
        export FNDEPLOY_LOG_LEVEL=DEBUG
        export FNDEPLOY_PACKAGE_PATH=.serverless/hello.zip

    Or via .env file::

        FNDEPLOY_KUBECONFIG=/etc/kube/config
        FNDEPLOY_VERIFY_PODS=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FNDEPLOY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Service layout
    service_file: Path = Path("serverless.yml")
    package_path: Path | None = None

    # Cluster access
    kubeconfig: Path | None = None
    context: str | None = None
    in_cluster: bool = False
    namespace: str | None = None  # None: the cluster's default namespace
    function_api_version: str = FUNCTION_API_VERSION

    # Post-deploy pod lookup
    verify_pods: bool = True


# Module-level singleton, import as `from fndeploy.config import settings`
settings = DeploySettings()
