"""Tests for fndeploy data models — immutability, wire format, aggregation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fndeploy.models import (
    DeploymentFailedError,
    DeploymentReport,
    FunctionConfig,
    FunctionMetadata,
    FunctionResult,
    FunctionSpec,
    ResolvedArtifacts,
    ResourceDescriptor,
    SubmissionOutcome,
    SubmissionStatus,
)


def _result(name: str, status: SubmissionStatus, error: str | None = None) -> FunctionResult:
    return FunctionResult(function_name=name, status=status, error=error)


class TestFrozenModels:
    def test_function_config_is_frozen(self):
        fn = FunctionConfig(name="hello", handler="handler.hello", runtime="python3.6")
        with pytest.raises(ValidationError):
            fn.name = "other"

    def test_resolved_artifacts_default_deps(self):
        assert ResolvedArtifacts(handler_content="X").deps_content == ""

    def test_descriptor_is_frozen(self):
        descriptor = ResourceDescriptor(
            metadata=FunctionMetadata(name="hello", namespace="default"),
            spec=FunctionSpec(deps="", function="X", handler="handler.hello", runtime="python3.6"),
        )
        with pytest.raises(ValidationError):
            descriptor.kind = "Other"


class TestResourceDescriptor:
    def test_to_body_wire_format(self):
        descriptor = ResourceDescriptor(
            metadata=FunctionMetadata(name="hello", namespace="functions"),
            spec=FunctionSpec(deps="six\n", function="X", handler="handler.hello", runtime="python2.7"),
        )
        assert descriptor.to_body() == {
            "apiVersion": "k8s.io/v1",
            "kind": "Function",
            "metadata": {"name": "hello", "namespace": "functions"},
            "spec": {
                "deps": "six\n",
                "function": "X",
                "handler": "handler.hello",
                "runtime": "python2.7",
                "topic": "",
                "type": "HTTP",
            },
        }

    def test_name_and_namespace_shortcuts(self):
        descriptor = ResourceDescriptor(
            metadata=FunctionMetadata(name="hello", namespace="ns"),
            spec=FunctionSpec(deps="", function="", handler="h.h", runtime="python"),
        )
        assert descriptor.name == "hello"
        assert descriptor.namespace == "ns"


class TestSubmissionOutcome:
    def test_constructors(self):
        assert SubmissionOutcome.created().status == SubmissionStatus.CREATED
        assert SubmissionOutcome.already_exists().status == SubmissionStatus.ALREADY_EXISTS
        failed = SubmissionOutcome.failed(500, "boom")
        assert failed.status == SubmissionStatus.FAILED
        assert failed.code == 500
        assert failed.message == "boom"


class TestDeploymentReport:
    def test_empty_report_succeeds(self):
        report = DeploymentReport()
        assert report.succeeded
        assert report.error_message == ""
        report.raise_for_failure()

    def test_already_exists_is_not_an_error(self):
        report = DeploymentReport(
            results=[
                _result("a", SubmissionStatus.CREATED),
                _result("b", SubmissionStatus.ALREADY_EXISTS),
            ],
            total=2,
        )
        assert report.succeeded
        assert report.errors == []
        assert report.completed == 2

    def test_failures_are_joined(self):
        report = DeploymentReport(
            results=[
                _result("a", SubmissionStatus.FAILED, "first failure"),
                _result("b", SubmissionStatus.CREATED),
                _result("c", SubmissionStatus.FAILED, "second failure"),
            ],
            total=3,
        )
        assert not report.succeeded
        assert report.errors == ["first failure", "second failure"]
        assert report.error_message == (
            "Found errors while deploying the given functions:\n"
            "first failure\n"
            "second failure"
        )

    def test_raise_for_failure(self):
        report = DeploymentReport(
            results=[_result("a", SubmissionStatus.FAILED, "nope")], total=1
        )
        with pytest.raises(DeploymentFailedError, match="nope"):
            report.raise_for_failure()

    def test_get_by_name(self):
        report = DeploymentReport(results=[_result("a", SubmissionStatus.CREATED)], total=1)
        assert report.get("a").status == SubmissionStatus.CREATED
        assert report.get("missing") is None
