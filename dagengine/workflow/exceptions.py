# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Exceptions

Custom exceptions for the workflow engine.
"""

from typing import Any, List, Optional

from dagengine.core.errors import DagEngineError, ValidationError


class WorkflowException(DagEngineError):
    """Base exception for workflow errors"""
    default_code = "WORKFLOW_ERROR"


class WorkflowValidationError(WorkflowException, ValidationError):
    """Workflow validation failed"""
    default_code = "INVALID_WORKFLOW"

    def __init__(self, message: str, field: str = None, details: Any = None):
        super().__init__(message, field=field, details=details)


class PlanError(WorkflowException):
    """Execution plan could not be built (cycle, unresolved topology)"""
    default_code = "PLAN_ERROR"

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid execution plan", details=self.errors)


class RunnerError(WorkflowException):
    """An exception escaped the orchestration loop"""
    default_code = "RUNNER_ERROR"


class NodeExecutionException(WorkflowException):
    """Node execution failed"""
    default_code = "EXECUTION_ERROR"

    def __init__(
        self,
        node_id: str,
        message: str,
        code: Optional[str] = None,
        details: Any = None
    ):
        self.node_id = node_id
        super().__init__(message, code=code, details=details)


class NodeTimeoutException(NodeExecutionException):
    """Node execution exceeded timeout"""
    default_code = "TIMEOUT"

    def __init__(self, node_id: str, timeout_ms: int):
        super().__init__(node_id, f"Execution timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class MissingExecutorError(NodeExecutionException):
    """No executor is registered for the node's type tag"""
    default_code = "MISSING_EXECUTOR"

    def __init__(self, node_id: str, node_type: str):
        super().__init__(node_id, f"No executor registered for node type: {node_type}")
        self.node_type = node_type
