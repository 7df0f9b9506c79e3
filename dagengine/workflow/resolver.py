# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Input Resolver

Wires upstream outputs into a node's input mapping.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from .models import Edge, Port
from .planner import ExecutionContext


def _find_port(port_id: str, ports: Sequence[Port]) -> Optional[Port]:
    for port in ports:
        if port.id == port_id:
            return port
    return None


def resolve_node_inputs(
    context: ExecutionContext,
    completed_outputs: Mapping[str, Dict[str, Any]],
    edges: Sequence[Edge],
    ports: Sequence[Port]
) -> Dict[str, Any]:
    """
    Compute the input mapping for a node.

    For serial wiring: the whole upstream output is merged in
    For port-scoped edges: only the field named by the target port's label

    Edges whose source has no recorded output contribute nothing. When
    unscoped edges collide on a key, the later edge wins.
    """
    inputs: Dict[str, Any] = {}

    for edge in edges:
        if edge.target != context.node_id:
            continue

        source_output = completed_outputs.get(edge.source)
        if source_output is None:
            continue

        if edge.target_port:
            port = _find_port(edge.target_port, ports)
            if port and port.label:
                inputs[port.label] = source_output.get(port.label)
        else:
            inputs.update(source_output)

    return inputs
