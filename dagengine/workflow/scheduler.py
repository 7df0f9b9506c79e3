# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Scheduling Strategies

Decide how planned nodes are dispatched. The runner only hands over the
plan and a per-node coroutine factory.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from .planner import ExecutionContext, ExecutionPlan

NodeDispatcher = Callable[[ExecutionContext], Awaitable[None]]


class SchedulingStrategy(ABC):
    """Walks an execution plan, dispatching each node exactly once"""

    @abstractmethod
    async def run(self, plan: ExecutionPlan, dispatch: NodeDispatcher) -> None:
        ...


class SequentialScheduler(SchedulingStrategy):
    """
    One node at a time, strictly in plan order.

    Dependency sets on the contexts would allow independent branches to run
    concurrently; this strategy deliberately does not.
    """

    async def run(self, plan: ExecutionPlan, dispatch: NodeDispatcher) -> None:
        for context in plan.nodes:
            await dispatch(context)
