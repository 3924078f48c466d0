"""fndeploy: deploy serverless functions as Function resources on Kubernetes.

Resolves each function's handler source and dependency manifest from a
packaged zip archive or the service directory, creates the Function custom
resource, and confirms the deployment against the namespace's pods.
"""

__version__ = "0.1.0"
__description__ = "Deploy serverless functions as Function resources on Kubernetes"

from fndeploy.core.orchestrator import Deployer, deploy_all
from fndeploy.models.functions import FunctionConfig
from fndeploy.models.outcomes import DeploymentFailedError, DeploymentReport

__all__ = [
    "Deployer",
    "deploy_all",
    "FunctionConfig",
    "DeploymentReport",
    "DeploymentFailedError",
    "__version__",
]
