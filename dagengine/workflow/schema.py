# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Schema Helpers

Builders for nodes, edges and ports, inbound/outbound queries, and the
boundary guard that turns raw records into a validated Workflow.
"""

import time
import uuid
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from pydantic import ValidationError

from .exceptions import WorkflowValidationError
from .models import Edge, Node, NodeType, Port, PortType, Position, Workflow


NODE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    NodeType.TEXT.value: {"label": "Text Node", "content": ""},
    NodeType.IMAGE.value: {"label": "Image Node", "url": "", "alt": ""},
    NodeType.VIDEO.value: {"label": "Video Node", "url": "", "format": "mp4"},
}


class NodePorts(NamedTuple):
    inputs: List[Port]
    outputs: List[Port]


class NodeEdges(NamedTuple):
    incoming: List[Edge]
    outgoing: List[Edge]


def generate_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"


# ============================================================================
# Nodes
# ============================================================================

def create_node(
    node_type: str,
    position: Optional[Dict[str, float]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> Node:
    """Create a built-in node with its default attributes"""
    if isinstance(node_type, NodeType):
        node_type = node_type.value
    if node_type not in NODE_DEFAULTS:
        raise ValueError(f"Unknown node type: {node_type}")

    return Node(
        id=generate_id(),
        type=node_type,
        position=Position(**(position or {})),
        data={**NODE_DEFAULTS[node_type], **(overrides or {})},
    )


def update_node(node: Node, updates: Mapping[str, Any]) -> Node:
    """Return a new node with top-level updates applied and data merged"""
    current = node.model_dump()
    merged = {**current, **updates}
    merged["data"] = {**current["data"], **(updates.get("data") or {})}
    return Node.model_validate(merged)


# ============================================================================
# Ports
# ============================================================================

def create_port(
    node_id: str,
    port_type: str,
    label: str,
    data_type: str,
    required: bool = False
) -> Port:
    return Port(
        id=generate_id(),
        node_id=node_id,
        type=PortType(port_type),
        label=label,
        data_type=data_type,
        required=required,
    )


def get_node_ports(node_id: str, ports: Sequence[Port]) -> NodePorts:
    node_ports = [port for port in ports if port.node_id == node_id]
    return NodePorts(
        inputs=[port for port in node_ports if port.type == PortType.INPUT],
        outputs=[port for port in node_ports if port.type == PortType.OUTPUT],
    )


def get_inbound_ports(node_id: str, ports: Sequence[Port]) -> List[Port]:
    return get_node_ports(node_id, ports).inputs


def get_outbound_ports(node_id: str, ports: Sequence[Port]) -> List[Port]:
    return get_node_ports(node_id, ports).outputs


# ============================================================================
# Edges
# ============================================================================

def create_edge(
    source: str,
    target: str,
    source_port: Optional[str] = None,
    target_port: Optional[str] = None,
    label: Optional[str] = None
) -> Edge:
    return Edge(
        id=generate_id(),
        source=source,
        target=target,
        source_port=source_port,
        target_port=target_port,
        label=label,
    )


def get_node_edges(node_id: str, edges: Sequence[Edge]) -> NodeEdges:
    return NodeEdges(
        incoming=[edge for edge in edges if edge.target == node_id],
        outgoing=[edge for edge in edges if edge.source == node_id],
    )


# ============================================================================
# Boundary guard
# ============================================================================

def parse_workflow(data: Any) -> Workflow:
    """
    Validate a raw workflow record and build a Workflow.

    Raises WorkflowValidationError if the record is structurally invalid.
    """
    if not isinstance(data, Mapping):
        raise WorkflowValidationError("Workflow must be an object")

    if not isinstance(data.get("metadata"), Mapping):
        raise WorkflowValidationError("Workflow metadata is missing", field="metadata")

    for key in ("nodes", "edges", "ports"):
        if not isinstance(data.get(key), list):
            raise WorkflowValidationError(f"Workflow {key} must be an array", field=key)

    try:
        return Workflow.model_validate(dict(data))
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise WorkflowValidationError(
            f"Invalid workflow structure: {e.error_count()} validation error(s)",
            field=field,
            details=e.errors(include_url=False),
        )


def is_valid_workflow(data: Any) -> bool:
    try:
        parse_workflow(data)
    except WorkflowValidationError:
        return False
    return True
