"""
Domain exceptions.

``WorkflowAbort`` and its subclasses stop a scenario run; the orchestrator
catches them at the workflow boundary and packages the partial trail.
Invocation errors (unknown scenario, unconfigured environment) are raised
before a run starts and surface to the caller.
"""
from __future__ import annotations


class OgwRunnerError(Exception):
    """Base class for all runner errors."""


class WorkflowAbort(OgwRunnerError):
    """A step failed hard; the run must stop."""


class SoapFaultError(WorkflowAbort):
    """The backend answered with a SOAP fault envelope."""

    def __init__(self, step_name: str, fault: str):
        self.step_name = step_name
        self.fault = fault
        super().__init__(f"{step_name} SOAP Fault: {fault}")


class CorrelationNotFoundError(WorkflowAbort):
    """An expected field was absent from a response."""

    def __init__(self, field_name: str, step_name: str):
        self.field_name = field_name
        self.step_name = step_name
        super().__init__(f"{field_name} not found in {step_name} response")


class PollFailedError(WorkflowAbort):
    """Completion polling ended in a hard failure or a timeout."""

    def __init__(self, message: str, attempts: int):
        self.attempts = attempts
        super().__init__(message)


class AssertionFailedError(WorkflowAbort):
    """A field-level assertion on a response did not hold."""


class StepFailedError(WorkflowAbort):
    """A step recorded FAILED for a reason not covered by the other aborts."""


class TransactionError(OgwRunnerError):
    """The outbound HTTP call could not be completed (network, timeout)."""


class StatusQueryError(OgwRunnerError):
    """The status-check collaborator could not execute a query."""


class EnvironmentNotConfiguredError(OgwRunnerError):
    """Required connection parameters are missing for the selected environment."""

    def __init__(self, environment: str, missing: list[str]):
        self.environment = environment
        self.missing = list(missing)
        super().__init__(
            f"Environment {environment} is not fully configured: missing {', '.join(self.missing)}"
        )


class UnknownScenarioError(OgwRunnerError):
    """No workflow is registered for the requested scenario id."""

    def __init__(self, scenario: str):
        self.scenario = scenario
        super().__init__(f"Unknown scenario: {scenario}")
