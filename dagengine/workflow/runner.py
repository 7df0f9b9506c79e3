# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Runner

Drives an execution plan node by node: emits lifecycle events, enforces a
per-node timeout, resolves inputs, dispatches to executors and aggregates
the per-node outcomes into a WorkflowExecution.

The runner never raises past run(); all failure information is returned in
the execution report.
"""

import asyncio
import time
import traceback
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Any, Dict, List, Optional, Set

from dagengine.core.config import Config, get_config
from dagengine.core.logging import get_engine_logger, log_event

from .events import EventChannel, ExecutionEventListener
from .exceptions import (
    MissingExecutorError,
    NodeExecutionException,
    NodeTimeoutException,
    PlanError,
    RunnerError,
)
from .models import (
    ExecutionEvent,
    ExecutionEventType,
    RunError,
    RunResult,
    RunStatus,
    Workflow,
    WorkflowExecution,
    utc_now,
)
from .planner import ExecutionContext, ExecutionPlan, build_execution_plan
from .registry import NodeExecutionConfig, NodeExecutor, NodeRegistry, get_default_registry
from .resolver import resolve_node_inputs
from .scheduler import SchedulingStrategy, SequentialScheduler

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class RunnerConfig:
    """Per-run settings"""
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    on_event: Optional[ExecutionEventListener] = None
    # Reserved: stored but never consulted; nodes always run one at a time.
    concurrency: int = 1

    @classmethod
    def from_config(cls, config: Optional[Config] = None, **overrides: Any) -> "RunnerConfig":
        """Defaults from the engine configuration, with per-run overrides"""
        config = config or get_config()
        values: Dict[str, Any] = {
            "timeout_ms": config.timeout_ms,
            "concurrency": config.concurrency,
        }
        values.update(overrides)
        return cls(**values)


def generate_execution_id() -> str:
    return f"exec_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)


def _error_code(error: Exception) -> str:
    code = getattr(error, "code", None)
    return code if isinstance(code, str) and code else NodeExecutionException.default_code


def _error_details(error: Exception) -> Any:
    details = getattr(error, "details", None)
    if details is not None:
        return details
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class WorkflowRunner:
    """
    Sequential workflow runner.

    Per node: queued -> running -> succeeded | failed. A failed node does not
    stop the run; downstream nodes receive whatever inputs are resolvable.
    """

    def __init__(
        self,
        workflow: Workflow,
        config: Optional[RunnerConfig] = None,
        registry: Optional[NodeRegistry] = None,
        scheduler: Optional[SchedulingStrategy] = None
    ):
        self.workflow = workflow
        self.config = config or RunnerConfig.from_config()
        self.registry = registry if registry is not None else get_default_registry()
        self.scheduler = scheduler or SequentialScheduler()
        self.events = EventChannel(self.config.on_event)
        self.logger = get_engine_logger("runner")

        self._execution_id = generate_execution_id()
        self._completed_outputs: Dict[str, Dict[str, Any]] = {}
        self._results: Dict[str, RunResult] = {}
        self._logs: Dict[str, List[str]] = {}
        self._abandoned: Set[asyncio.Task] = set()

    @property
    def execution_id(self) -> str:
        return self._execution_id

    def get_execution_id(self) -> str:
        return self._execution_id

    def get_logs(self, node_id: str) -> List[str]:
        return list(self._logs.get(node_id, []))

    async def run(self) -> WorkflowExecution:
        """
        Execute the workflow.

        Returns the execution report; never raises for plan, node or
        runner failures.

        Executors abandoned after a timeout are not awaited and may still be
        pending when this returns. Keep the event loop alive until they
        finish, or asyncio reports them as destroyed while pending.
        """
        started_at = utc_now()
        workflow_id = self.workflow.metadata.id
        self._completed_outputs = {}
        self._results = {}
        self._logs = {}

        log_event(
            self.logger, "Workflow run started",
            workflow_id=workflow_id,
            execution_id=self._execution_id,
            node_count=len(self.workflow.nodes),
        )

        try:
            plan = build_execution_plan(self.workflow)
            for warning in plan.warnings:
                self.logger.warning(f"[{workflow_id}] {warning}")

            if not plan.valid:
                return self._reject_plan(plan, started_at)

            for context in plan.nodes:
                self._results[context.node_id] = RunResult(
                    node_id=context.node_id,
                    status=RunStatus.PENDING,
                    started_at=started_at,
                )

            await self.scheduler.run(plan, self._execute_node)

            has_errors = any(result.is_error for result in self._results.values())
            execution = WorkflowExecution(
                workflow_id=workflow_id,
                execution_id=self._execution_id,
                status=RunStatus.ERROR if has_errors else RunStatus.SUCCESS,
                results=list(self._results.values()),
                started_at=started_at,
                completed_at=utc_now(),
            )
        except Exception as e:
            error = RunnerError(str(e) or "Unknown error")
            self.logger.exception(f"Workflow runner failed for '{workflow_id}': {error.message}")
            completed_at = utc_now()
            execution = WorkflowExecution(
                workflow_id=workflow_id,
                execution_id=self._execution_id,
                status=RunStatus.ERROR,
                results=[
                    RunResult(
                        node_id="runner",
                        status=RunStatus.ERROR,
                        started_at=started_at,
                        completed_at=completed_at,
                        error=RunError(message=error.message, code=error.code),
                    )
                ],
                started_at=started_at,
                completed_at=completed_at,
            )

        log_event(
            self.logger, "Workflow run finished",
            workflow_id=workflow_id,
            execution_id=self._execution_id,
            status=execution.status.value,
        )
        return execution

    def _reject_plan(self, plan: ExecutionPlan, started_at: str) -> WorkflowExecution:
        """One synthetic error result per planning error; no node runs"""
        error = PlanError(plan.errors)
        log_event(
            self.logger, "Execution plan rejected", level="WARNING",
            workflow_id=self.workflow.metadata.id,
            execution_id=self._execution_id,
            errors=error.errors,
        )
        completed_at = utc_now()
        return WorkflowExecution(
            workflow_id=self.workflow.metadata.id,
            execution_id=self._execution_id,
            status=RunStatus.ERROR,
            results=[
                RunResult(
                    node_id=f"error-{index}",
                    status=RunStatus.ERROR,
                    started_at=started_at,
                    completed_at=completed_at,
                    error=RunError(message=message, code=error.code),
                )
                for index, message in enumerate(error.errors)
            ],
            started_at=started_at,
            completed_at=completed_at,
        )

    async def _execute_node(self, context: ExecutionContext) -> None:
        """Execute a single node and record its outcome"""
        node = context.node
        node_id = context.node_id
        started_at = utc_now()
        start = time.perf_counter()

        try:
            self._emit(ExecutionEvent(node_id=node_id, status=ExecutionEventType.QUEUED))

            self._results[node_id] = RunResult(
                node_id=node_id,
                status=RunStatus.RUNNING,
                started_at=started_at,
            )
            self._emit(ExecutionEvent(node_id=node_id, status=ExecutionEventType.RUNNING))

            context.inputs = resolve_node_inputs(
                context,
                self._completed_outputs,
                self.workflow.edges,
                self.workflow.ports,
            )

            executor = self.registry.get(node.type)
            if executor is None:
                raise MissingExecutorError(node_id, node.type)

            config = NodeExecutionConfig(
                node_id=node_id,
                node_type=node.type,
                node_data=dict(node.data),
            )
            output = await self._execute_with_timeout(node_id, executor, config, context.inputs)

            if not isinstance(output, dict):
                raise NodeExecutionException(
                    node_id,
                    f"Executor for node type '{node.type}' returned "
                    f"{type(output).__name__}, expected a mapping",
                )

            self._record_success(node_id, output, started_at, _elapsed_ms(start))
        except Exception as e:
            self._record_failure(node_id, e, started_at, _elapsed_ms(start))

    async def _execute_with_timeout(
        self,
        node_id: str,
        executor: NodeExecutor,
        config: NodeExecutionConfig,
        inputs: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Race the executor against the timeout.

        On timeout the executor task is left running (shielded from
        cancellation) and whatever it eventually produces is discarded.
        """
        timeout_ms = self.config.timeout_ms or DEFAULT_TIMEOUT_MS
        task = asyncio.ensure_future(executor.execute(config, inputs))

        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError:
            self._abandoned.add(task)
            task.add_done_callback(partial(self._discard_late_result, node_id))
            raise NodeTimeoutException(node_id, timeout_ms)

    def _discard_late_result(self, node_id: str, task: asyncio.Task) -> None:
        self._abandoned.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.debug(f"Discarded late failure from timed-out node '{node_id}': {error}")
        else:
            self.logger.debug(f"Discarded late result from timed-out node '{node_id}'")

    def _record_success(
        self,
        node_id: str,
        output: Dict[str, Any],
        started_at: str,
        duration: float
    ) -> None:
        """
        Record a successful node. The output only becomes visible downstream
        once the result validates and the consumer has accepted the event.
        """
        completed_at = utc_now()
        result = RunResult(
            node_id=node_id,
            status=RunStatus.SUCCESS,
            started_at=started_at,
            completed_at=completed_at,
            duration=duration,
            output=output,
        )
        self._emit(ExecutionEvent(
            node_id=node_id,
            status=ExecutionEventType.SUCCEEDED,
            timestamp=completed_at,
            output=output,
            duration=duration,
            logs=self.get_logs(node_id),
        ))

        self._results[node_id] = result
        self._completed_outputs[node_id] = output

    def _record_failure(
        self,
        node_id: str,
        error: Exception,
        started_at: str,
        duration: float
    ) -> None:
        completed_at = utc_now()
        message = str(error) or "Unknown error"
        code = _error_code(error)

        self._results[node_id] = RunResult(
            node_id=node_id,
            status=RunStatus.ERROR,
            started_at=started_at,
            completed_at=completed_at,
            duration=duration,
            error=RunError(message=message, code=code, details=_error_details(error)),
        )
        self._emit(ExecutionEvent(
            node_id=node_id,
            status=ExecutionEventType.FAILED,
            timestamp=completed_at,
            error=RunError(message=message, code=code),
            duration=duration,
            logs=self.get_logs(node_id),
        ))

        self._logs.setdefault(node_id, []).append(f"Error: {message}")
        self.logger.error(f"Node '{node_id}' failed [{code}]: {message}")

    def _emit(self, event: ExecutionEvent) -> None:
        self.events.publish(event)


def create_runner(
    workflow: Workflow,
    config: Optional[RunnerConfig] = None,
    **kwargs: Any
) -> WorkflowRunner:
    return WorkflowRunner(workflow, config, **kwargs)


async def run_workflow(
    workflow: Workflow,
    config: Optional[RunnerConfig] = None,
    **kwargs: Any
) -> WorkflowExecution:
    """Build a runner and execute the workflow once"""
    runner = WorkflowRunner(workflow, config, **kwargs)
    return await runner.run()
