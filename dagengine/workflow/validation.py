# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Validation

Structural DAG checks: cycles, dangling edges, isolated nodes and
duplicate edges. Everything here is a pure function of the graph.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from .models import Edge, Node


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class CycleCheck:
    has_cycle: bool
    cycle: List[str] = field(default_factory=list)


def build_adjacency_list(nodes: Sequence[Node], edges: Sequence[Edge]) -> Dict[str, List[str]]:
    """Map node_id -> targets, in edge order"""
    adjacency: Dict[str, List[str]] = {node.id: [] for node in nodes}

    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)

    return adjacency


def find_cycle(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[str]:
    """
    Find the first cycle reachable by depth-first search.

    Roots are tried in node order. Returns the DFS path slice from the
    repeated node's first occurrence, closed with the repeated node
    (e.g. ["A", "B", "A"]), or [] if the graph is acyclic.
    """
    adjacency = build_adjacency_list(nodes, edges)
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []

    for node in nodes:
        if node.id in visited:
            continue

        visited.add(node.id)
        on_stack.add(node.id)
        path.append(node.id)
        stack: List[Tuple[str, Iterator[str]]] = [(node.id, iter(adjacency.get(node.id, [])))]

        while stack:
            current, neighbors = stack[-1]
            descended = False

            for neighbor in neighbors:
                if neighbor in on_stack:
                    return path[path.index(neighbor):] + [neighbor]
                if neighbor not in visited:
                    visited.add(neighbor)
                    on_stack.add(neighbor)
                    path.append(neighbor)
                    stack.append((neighbor, iter(adjacency.get(neighbor, []))))
                    descended = True
                    break

            if not descended:
                stack.pop()
                on_stack.discard(current)
                path.pop()

    return []


def detect_cycle(nodes: Sequence[Node], edges: Sequence[Edge]) -> bool:
    """True if the graph contains a cycle (self-loops included)"""
    return bool(find_cycle(nodes, edges))


def check_for_cycles(nodes: Sequence[Node], edges: Sequence[Edge]) -> CycleCheck:
    cycle = find_cycle(nodes, edges)
    return CycleCheck(has_cycle=bool(cycle), cycle=cycle)


def format_cycle(cycle: Sequence[str]) -> str:
    return f"Workflow contains a cycle: {' -> '.join(cycle) or 'unknown'}"


def validate_workflow_dag(nodes: Sequence[Node], edges: Sequence[Edge]) -> ValidationResult:
    """
    Validate workflow structure.

    Hard errors:
    - Cycles (reported with the node sequence of the first one found)
    - Edges referencing non-existent nodes

    Warnings:
    - Nodes without any edge (only when the workflow has more than one node)
    - Multiple edges between the same ordered pair of nodes
    """
    errors: List[str] = []
    warnings: List[str] = []

    # 1. Cycles
    cycle_check = check_for_cycles(nodes, edges)
    if cycle_check.has_cycle:
        errors.append(format_cycle(cycle_check.cycle))

    # 2. Dangling edge endpoints
    node_ids = {node.id for node in nodes}
    for edge in edges:
        if edge.source not in node_ids:
            errors.append(f"Edge {edge.id} references non-existent source node: {edge.source}")
        if edge.target not in node_ids:
            errors.append(f"Edge {edge.id} references non-existent target node: {edge.target}")

    # 3. Isolated nodes
    connected: Set[str] = set()
    for edge in edges:
        connected.add(edge.source)
        connected.add(edge.target)

    if len(nodes) > 1:
        for node in nodes:
            if node.id not in connected:
                warnings.append(
                    f"Node {node.id} ({node.label}) is not connected to any other nodes"
                )

    # 4. Duplicate edges
    pair_counts: Dict[str, int] = {}
    for edge in edges:
        key = f"{edge.source}->{edge.target}"
        pair_counts[key] = pair_counts.get(key, 0) + 1

    for key, count in pair_counts.items():
        if count > 1:
            warnings.append(f"Multiple edges exist between the same nodes: {key}")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
