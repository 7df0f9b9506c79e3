# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow engine: validation, planning, input wiring, executors and the runner.
"""

from .events import EventChannel, ExecutionEventListener
from .exceptions import (
    MissingExecutorError,
    NodeExecutionException,
    NodeTimeoutException,
    PlanError,
    RunnerError,
    WorkflowException,
    WorkflowValidationError,
)
from .loader import load_workflow
from .models import (
    Edge,
    ExecutionEvent,
    ExecutionEventType,
    Node,
    NodeType,
    Port,
    PortType,
    RunError,
    RunResult,
    RunStatus,
    Workflow,
    WorkflowExecution,
    WorkflowMetadata,
)
from .planner import (
    ExecutionContext,
    ExecutionPlan,
    build_execution_plan,
    get_node_dependencies,
    get_node_dependents,
    topological_sort,
)
from .registry import (
    NodeExecutionConfig,
    NodeExecutor,
    NodeRegistry,
    get_default_registry,
)
from .resolver import resolve_node_inputs
from .runner import RunnerConfig, WorkflowRunner, create_runner, run_workflow
from .scheduler import SchedulingStrategy, SequentialScheduler
from .schema import is_valid_workflow, parse_workflow
from .validation import ValidationResult, check_for_cycles, detect_cycle, validate_workflow_dag

__all__ = [
    "EventChannel",
    "ExecutionEventListener",
    "MissingExecutorError",
    "NodeExecutionException",
    "NodeTimeoutException",
    "PlanError",
    "RunnerError",
    "WorkflowException",
    "WorkflowValidationError",
    "load_workflow",
    "Edge",
    "ExecutionEvent",
    "ExecutionEventType",
    "Node",
    "NodeType",
    "Port",
    "PortType",
    "RunError",
    "RunResult",
    "RunStatus",
    "Workflow",
    "WorkflowExecution",
    "WorkflowMetadata",
    "ExecutionContext",
    "ExecutionPlan",
    "build_execution_plan",
    "get_node_dependencies",
    "get_node_dependents",
    "topological_sort",
    "NodeExecutionConfig",
    "NodeExecutor",
    "NodeRegistry",
    "get_default_registry",
    "resolve_node_inputs",
    "RunnerConfig",
    "WorkflowRunner",
    "create_runner",
    "run_workflow",
    "SchedulingStrategy",
    "SequentialScheduler",
    "is_valid_workflow",
    "parse_workflow",
    "ValidationResult",
    "check_for_cycles",
    "detect_cycle",
    "validate_workflow_dag",
]
