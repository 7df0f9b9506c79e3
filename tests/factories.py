# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Builders for test workflows
"""

from dagengine.workflow.models import Edge, Node, Port, Workflow, WorkflowMetadata


def make_node(node_id: str, node_type: str = "text", **data) -> Node:
    return Node(id=node_id, type=node_type, data={"label": f"Node {node_id}", **data})


def make_edge(source: str, target: str, **kwargs) -> Edge:
    return Edge(id=kwargs.pop("id", f"{source}->{target}"), source=source, target=target, **kwargs)


def make_port(port_id: str, node_id: str, label: str, port_type: str = "input") -> Port:
    return Port(id=port_id, node_id=node_id, type=port_type, label=label, data_type="string")


def make_workflow(nodes, edges=None, ports=None, workflow_id: str = "test-workflow") -> Workflow:
    return Workflow(
        metadata=WorkflowMetadata(
            id=workflow_id,
            name="Test Workflow",
            version="1.0.0",
            created_at="2025-01-01T00:00:00Z",
            updated_at="2025-01-01T00:00:00Z",
        ),
        nodes=nodes,
        edges=edges or [],
        ports=ports or [],
    )


def workflow_record(**overrides) -> dict:
    """Raw wire-format workflow record"""
    record = {
        "metadata": {
            "id": "wf-1",
            "name": "Sample",
            "version": "1.0.0",
            "createdAt": "2025-01-01T00:00:00Z",
            "updatedAt": "2025-01-01T00:00:00Z",
        },
        "nodes": [
            {"id": "a", "type": "text", "position": {"x": 0, "y": 0}, "data": {"label": "A", "content": "hi"}},
            {"id": "b", "type": "image", "position": {"x": 100, "y": 0}, "data": {"label": "B", "url": "x.png"}},
        ],
        "edges": [{"id": "e1", "source": "a", "target": "b"}],
        "ports": [],
    }
    record.update(overrides)
    return record
