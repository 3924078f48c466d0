"""Deployment Submitter: one create call, classified.

Creation is the only write path. An existing Function is left untouched;
re-deploying it requires removing it first.
"""

from __future__ import annotations

import logging

from fndeploy.core.cluster import ClusterApi, ClusterApiError
from fndeploy.models.descriptor import FUNCTION_PLURAL, ResourceDescriptor
from fndeploy.models.outcomes import SubmissionOutcome

logger = logging.getLogger(__name__)


def submit(descriptor: ResourceDescriptor, cluster: ClusterApi) -> SubmissionOutcome:
    """Create the Function resource and classify the response.

    No retry: a transport failure surfaces as FAILED like any other error.
    """
    try:
        cluster.create_resource(FUNCTION_PLURAL, descriptor.namespace, descriptor.to_body())
    except ClusterApiError as exc:
        if exc.is_conflict:
            logger.info(
                "The function %s is already deployed. "
                "Remove it if you want to deploy it again.",
                descriptor.name,
            )
            return SubmissionOutcome.already_exists()
        return SubmissionOutcome.failed(exc.code, exc.message)
    return SubmissionOutcome.created()


def failure_message(function_name: str, outcome: SubmissionOutcome) -> str:
    """Diagnostic text for a FAILED outcome, code and message verbatim."""
    return (
        f"Unable to deploy the function {function_name}. Received:\n"
        f"  Code: {outcome.code}\n"
        f"  Message: {outcome.message}"
    )
