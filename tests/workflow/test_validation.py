# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for workflow DAG validation
"""

from dagengine.workflow.validation import (
    build_adjacency_list,
    check_for_cycles,
    detect_cycle,
    find_cycle,
    validate_workflow_dag,
)
from tests.factories import make_edge, make_node


def test_empty_graph_has_no_cycle():
    """Empty graph is trivially acyclic"""
    assert detect_cycle([], []) is False
    assert check_for_cycles([], []).cycle == []


def test_single_node_has_no_cycle():
    assert detect_cycle([make_node("node1")], []) is False


def test_linear_graph_has_no_cycle():
    """A → B → C is acyclic"""
    nodes = [make_node("A"), make_node("B"), make_node("C")]
    edges = [make_edge("A", "B"), make_edge("B", "C")]

    assert detect_cycle(nodes, edges) is False


def test_self_loop():
    """Self-loop is a cycle"""
    nodes = [make_node("node1")]
    edges = [make_edge("node1", "node1")]

    check = check_for_cycles(nodes, edges)

    assert check.has_cycle is True
    assert check.cycle == ["node1", "node1"]


def test_two_node_cycle():
    nodes = [make_node("A"), make_node("B")]
    edges = [make_edge("A", "B"), make_edge("B", "A")]

    assert find_cycle(nodes, edges) == ["A", "B", "A"]


def test_cycle_path_starts_at_repeated_node():
    """Prefix of the DFS path before the cycle is not reported"""
    nodes = [make_node("start"), make_node("X"), make_node("Y"), make_node("Z")]
    edges = [
        make_edge("start", "X"),
        make_edge("X", "Y"),
        make_edge("Y", "Z"),
        make_edge("Z", "X"),
    ]

    assert find_cycle(nodes, edges) == ["X", "Y", "Z", "X"]


def test_cycle_detection_reported_as_error():
    """Cycle should make the graph invalid and name its nodes"""
    nodes = [make_node("node1"), make_node("node2"), make_node("node3")]
    edges = [
        make_edge("node1", "node2"),
        make_edge("node2", "node3"),
        make_edge("node3", "node1"),
    ]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is False
    assert result.errors == ["Workflow contains a cycle: node1 -> node2 -> node3 -> node1"]


def test_deep_chain_does_not_hit_recursion_limit():
    nodes = [make_node(f"n{i}") for i in range(5000)]
    edges = [make_edge(f"n{i}", f"n{i + 1}") for i in range(4999)]

    assert detect_cycle(nodes, edges) is False


def test_invalid_edge_source():
    """Edge with a non-existent source is a hard error"""
    nodes = [make_node("node1")]
    edges = [make_edge("nonexistent", "node1", id="e1")]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is False
    assert "Edge e1 references non-existent source node: nonexistent" in result.errors


def test_invalid_edge_target():
    nodes = [make_node("node1")]
    edges = [make_edge("node1", "nonexistent", id="e1")]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is False
    assert "Edge e1 references non-existent target node: nonexistent" in result.errors


def test_isolated_node_is_warning():
    """Disconnected node is a warning, not an error"""
    nodes = [make_node("node1"), make_node("node2"), make_node("node3")]
    edges = [make_edge("node1", "node2")]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is True
    assert result.errors == []
    assert result.warnings == ["Node node3 (Node node3) is not connected to any other nodes"]


def test_single_node_is_not_isolated():
    result = validate_workflow_dag([make_node("only")], [])

    assert result.valid is True
    assert result.warnings == []


def test_duplicate_edges_warn_once_per_pair():
    nodes = [make_node("A"), make_node("B")]
    edges = [
        make_edge("A", "B", id="e1"),
        make_edge("A", "B", id="e2"),
        make_edge("A", "B", id="e3"),
    ]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is True
    assert result.warnings == ["Multiple edges exist between the same nodes: A->B"]


def test_opposite_edges_are_not_duplicates():
    """A→B and B→A is a cycle, not a duplicate pair"""
    nodes = [make_node("A"), make_node("B")]
    edges = [make_edge("A", "B"), make_edge("B", "A")]

    result = validate_workflow_dag(nodes, edges)

    assert result.valid is False
    assert result.warnings == []


def test_errors_follow_input_order():
    nodes = [make_node("A"), make_node("B")]
    edges = [
        make_edge("A", "ghost1", id="e1"),
        make_edge("ghost2", "B", id="e2"),
    ]

    result = validate_workflow_dag(nodes, edges)

    assert result.errors == [
        "Edge e1 references non-existent target node: ghost1",
        "Edge e2 references non-existent source node: ghost2",
    ]


def test_validation_is_deterministic():
    """Validating the same graph twice gives identical results"""
    nodes = [make_node("A"), make_node("B"), make_node("C"), make_node("D")]
    edges = [
        make_edge("A", "B"),
        make_edge("A", "B", id="dup"),
        make_edge("B", "A"),
        make_edge("C", "ghost"),
    ]

    first = validate_workflow_dag(nodes, edges)
    second = validate_workflow_dag(nodes, edges)

    assert first == second


def test_adjacency_list_keeps_edge_order():
    nodes = [make_node("A"), make_node("B"), make_node("C")]
    edges = [make_edge("A", "C"), make_edge("A", "B")]

    assert build_adjacency_list(nodes, edges) == {"A": ["C", "B"], "B": [], "C": []}
