# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Models

Pydantic models for workflow definitions, run results and execution events.
Wire names are camelCase aliases; Python attributes are snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional

from pydantic import BaseModel, Field, ConfigDict, ValidationError, model_validator


def utc_now() -> str:
    """Current UTC time as ISO-8601 with a Z suffix"""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class WireModel(BaseModel):
    """Base for records that cross the engine boundary"""
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using wire names, dropping unset optional fields"""
        data = self.model_dump(by_alias=True, mode="json")
        return {key: value for key, value in data.items() if value is not None}


# ============================================================================
# Nodes
# ============================================================================

class NodeType(str, Enum):
    """Built-in node type tags. Other tags are allowed for custom executors."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class Position(BaseModel):
    """Canvas position (UI metadata, unused by the engine)"""
    x: float = 0
    y: float = 0


class NodeData(BaseModel):
    """Attributes shared by every built-in node type"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    label: str


class TextNodeData(NodeData):
    content: Optional[str] = None
    max_length: Optional[int] = Field(None, alias="maxLength")


class ImageNodeData(NodeData):
    url: Optional[str] = None
    alt: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None


class VideoNodeData(NodeData):
    url: Optional[str] = None
    duration: Optional[float] = None
    format: Optional[str] = None


NODE_DATA_MODELS = {
    NodeType.TEXT.value: TextNodeData,
    NodeType.IMAGE.value: ImageNodeData,
    NodeType.VIDEO.value: VideoNodeData,
}


class Node(WireModel):
    """
    Workflow node.

    Common envelope (id, type tag, attribute mapping). For built-in types the
    attribute mapping is checked against the type's data model on construction.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    type: str
    position: Position = Field(default_factory=Position)
    data: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_typed_data(self) -> "Node":
        data_model = NODE_DATA_MODELS.get(self.type)
        if data_model is not None:
            try:
                data_model.model_validate(self.data)
            except ValidationError as e:
                raise ValueError(f"Invalid data for {self.type} node '{self.id}': {e}")
        return self

    @property
    def label(self) -> Optional[str]:
        return self.data.get("label")


# ============================================================================
# Edges and ports
# ============================================================================

class Edge(WireModel):
    """Directed dependency: target depends on source"""
    id: str
    source: str
    target: str
    source_port: Optional[str] = Field(None, alias="sourcePort")
    target_port: Optional[str] = Field(None, alias="targetPort")
    label: Optional[str] = None


class PortType(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class Port(WireModel):
    """Named, typed slot on a node; scopes field-to-field bindings"""
    id: str
    node_id: str = Field(alias="nodeId")
    type: PortType
    label: str
    data_type: str = Field(alias="dataType")
    required: bool = False


# ============================================================================
# Workflow
# ============================================================================

class WorkflowMetadata(WireModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    version: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    description: Optional[str] = None
    author: Optional[str] = None
    tags: Optional[List[str]] = None


class Workflow(WireModel):
    """Complete workflow definition (immutable for the duration of a run)"""
    metadata: WorkflowMetadata
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    ports: List[Port] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get node by id"""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


# ============================================================================
# Run results
# ============================================================================

class RunStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    # Reserved for a future cancellation signal; never produced by the runner.
    CANCELLED = "cancelled"


class RunError(WireModel):
    """Error payload of a failed node"""
    message: str
    code: Optional[str] = None
    details: Optional[Any] = None


class RunResult(WireModel):
    """Outcome record for a single node"""
    node_id: str = Field(alias="nodeId")
    status: RunStatus
    started_at: Optional[str] = Field(None, alias="startedAt")
    completed_at: Optional[str] = Field(None, alias="completedAt")
    duration: Optional[float] = None
    output: Optional[Dict[str, Any]] = None
    error: Optional[RunError] = None

    @model_validator(mode="after")
    def _output_or_error(self) -> "RunResult":
        if self.output is not None and self.error is not None:
            raise ValueError("A run result carries either output or error, not both")
        return self

    @property
    def is_success(self) -> bool:
        return self.status == RunStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == RunStatus.ERROR


class WorkflowExecution(WireModel):
    """Aggregate report of one workflow run"""
    workflow_id: str = Field(alias="workflowId")
    execution_id: str = Field(alias="executionId")
    status: RunStatus
    results: List[RunResult] = Field(default_factory=list)
    started_at: str = Field(alias="startedAt")
    completed_at: Optional[str] = Field(None, alias="completedAt")

    def get_result(self, node_id: str) -> Optional[RunResult]:
        for result in self.results:
            if result.node_id == node_id:
                return result
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["results"] = [result.to_dict() for result in self.results]
        return data


# ============================================================================
# Events
# ============================================================================

class ExecutionEventType(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ExecutionEvent(WireModel):
    """Lifecycle notification for a node, delivered synchronously"""
    node_id: str = Field(alias="nodeId")
    status: ExecutionEventType
    timestamp: str = Field(default_factory=utc_now)
    output: Optional[Dict[str, Any]] = None
    error: Optional[RunError] = None
    duration: Optional[float] = None
    logs: Optional[List[str]] = None
