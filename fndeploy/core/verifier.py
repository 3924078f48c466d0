"""Post-Deployment Verifier — a single best-effort pod snapshot.

Runs right after a Function is created. The pod may not be scheduled yet,
so finding nothing is an expected outcome, not an error. A failing pod
listing is tolerated the same way.
"""

from __future__ import annotations

import logging

from fndeploy.core.cluster import ClusterApi, ClusterApiError
from fndeploy.models.outcomes import PodIdentity

logger = logging.getLogger(__name__)

FUNCTION_LABEL = "function"


def verify(
    function_name: str,
    cluster: ClusterApi,
    namespace: str | None = None,
) -> PodIdentity | None:
    """Return the first pod labelled ``function=<function_name>``, if any."""
    try:
        pods = cluster.list_pods(namespace)
    except ClusterApiError as exc:
        logger.debug("Could not list pods to confirm %s: %s", function_name, exc)
        return None

    for pod in pods:
        if pod.labels.get(FUNCTION_LABEL) == function_name:
            logger.info("Function %s is served by pod %s", function_name, pod.name)
            return pod

    logger.debug("No pod found yet for function %s", function_name)
    return None
