# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Planner

Topological ordering (Kahn's algorithm) and per-node dependency sets.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .models import Edge, Node, Workflow
from .validation import validate_workflow_dag


@dataclass
class ExecutionContext:
    """A planned node and the upstream nodes it depends on"""
    node_id: str
    node: Node
    dependencies: List[str] = field(default_factory=list)
    inputs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExecutionPlan:
    valid: bool
    nodes: List[ExecutionContext] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def order(self) -> List[str]:
        return [context.node_id for context in self.nodes]


def topological_sort(nodes: Sequence[Node], edges: Sequence[Edge]) -> Optional[List[Node]]:
    """
    Perform topological sort using Kahn's algorithm.

    Zero in-degree nodes are seeded in node order and dequeued FIFO, so
    independent roots and branches keep their original relative order.
    Edges touching unknown nodes are ignored.

    Returns None if the graph has a cycle.
    """
    graph: Dict[str, List[str]] = {node.id: [] for node in nodes}
    in_degree: Dict[str, int] = {node.id: 0 for node in nodes}

    for edge in edges:
        if edge.source not in graph or edge.target not in graph:
            continue
        graph[edge.source].append(edge.target)
        in_degree[edge.target] += 1

    queue = deque(node.id for node in nodes if in_degree[node.id] == 0)
    node_map = {node.id: node for node in nodes}
    ordered: List[Node] = []

    while queue:
        node_id = queue.popleft()
        ordered.append(node_map[node_id])

        for neighbor in graph[node_id]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    if len(ordered) != len(nodes):
        return None

    return ordered


def build_dependency_map(edges: Sequence[Edge]) -> Dict[str, List[str]]:
    """Build map of node_id -> de-duplicated source ids, in edge order"""
    dependencies: Dict[str, List[str]] = {}

    for edge in edges:
        deps = dependencies.setdefault(edge.target, [])
        if edge.source not in deps:
            deps.append(edge.source)

    return dependencies


def get_node_dependencies(node_id: str, edges: Sequence[Edge]) -> List[str]:
    return [edge.source for edge in edges if edge.target == node_id]


def get_node_dependents(node_id: str, edges: Sequence[Edge]) -> List[str]:
    return [edge.target for edge in edges if edge.source == node_id]


def build_execution_plan(workflow: Workflow) -> ExecutionPlan:
    """
    Build the execution plan for a workflow.

    Structural errors (cycles, dangling edges) make the plan invalid and no
    contexts are produced. Validator warnings are carried on the plan.
    """
    validation = validate_workflow_dag(workflow.nodes, workflow.edges)
    if not validation.valid:
        return ExecutionPlan(
            valid=False,
            errors=validation.errors,
            warnings=validation.warnings,
        )

    sorted_nodes = topological_sort(workflow.nodes, workflow.edges)
    if sorted_nodes is None:
        return ExecutionPlan(
            valid=False,
            errors=["Failed to topologically sort nodes (possible cycle)"],
            warnings=validation.warnings,
        )

    dependency_map = build_dependency_map(workflow.edges)
    contexts = [
        ExecutionContext(
            node_id=node.id,
            node=node,
            dependencies=list(dependency_map.get(node.id, [])),
        )
        for node in sorted_nodes
    ]

    return ExecutionPlan(valid=True, nodes=contexts, warnings=validation.warnings)
