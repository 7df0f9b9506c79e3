# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Executor Registry

Maps node type tags to executors. A registry is a plain value owned by (or
injected into) a runner, so runs can be isolated from each other.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union

from .models import NodeType

logger = logging.getLogger(__name__)


@dataclass
class NodeExecutionConfig:
    """What an executor gets to know about the node it runs"""
    node_id: str
    node_type: str
    node_data: Dict[str, Any] = field(default_factory=dict)


class NodeExecutor(ABC):
    """
    Capability interface for node executors.

    Implementations return the node's output record, or raise (conventionally
    NodeExecutionException) to fail the node.
    """

    description: Optional[str] = None

    @abstractmethod
    async def execute(self, config: NodeExecutionConfig, inputs: Dict[str, Any]) -> Dict[str, Any]:
        ...


ExecutorFunction = Callable[[NodeExecutionConfig, Dict[str, Any]], Awaitable[Dict[str, Any]]]


class FunctionExecutor(NodeExecutor):
    """Adapts a bare async function to the executor interface"""

    def __init__(self, func: ExecutorFunction, description: Optional[str] = None):
        self.func = func
        self.description = description

    async def execute(self, config: NodeExecutionConfig, inputs: Dict[str, Any]) -> Dict[str, Any]:
        return await self.func(config, inputs)


# ============================================================================
# Built-in executors
# ============================================================================

class TextExecutor(NodeExecutor):
    description = "Text node that processes and returns text content"

    async def execute(self, config, inputs):
        data = config.node_data
        return {
            "content": data.get("content") or "",
            "label": data.get("label") or "Text Node",
            **inputs,
        }


class ImageExecutor(NodeExecutor):
    description = "Image node that handles image metadata"

    async def execute(self, config, inputs):
        data = config.node_data
        return {
            "url": data.get("url") or "",
            "alt": data.get("alt") or "",
            "width": data.get("width"),
            "height": data.get("height"),
            "label": data.get("label") or "Image Node",
            **inputs,
        }


class VideoExecutor(NodeExecutor):
    description = "Video node that handles video metadata"

    async def execute(self, config, inputs):
        data = config.node_data
        return {
            "url": data.get("url") or "",
            "format": data.get("format") or "mp4",
            "duration": data.get("duration"),
            "label": data.get("label") or "Video Node",
            **inputs,
        }


BUILTIN_EXECUTORS: Dict[str, Type[NodeExecutor]] = {
    NodeType.TEXT.value: TextExecutor,
    NodeType.IMAGE.value: ImageExecutor,
    NodeType.VIDEO.value: VideoExecutor,
}


# ============================================================================
# Registry
# ============================================================================

class NodeRegistry:
    """
    Node type tag -> executor.

    Registering a tag twice replaces the earlier executor (last write wins).
    """

    def __init__(self):
        self._executors: Dict[str, NodeExecutor] = {}

    @classmethod
    def with_builtins(cls) -> "NodeRegistry":
        """Registry pre-populated with the text/image/video executors"""
        registry = cls()
        for node_type, executor_cls in BUILTIN_EXECUTORS.items():
            registry.register(node_type, executor_cls())
        return registry

    def register(
        self,
        node_type: str,
        executor: Union[NodeExecutor, ExecutorFunction],
        description: Optional[str] = None
    ) -> None:
        if not isinstance(executor, NodeExecutor):
            if not callable(executor):
                raise TypeError(
                    f"Executor for '{node_type}' must be a NodeExecutor or an async function"
                )
            executor = FunctionExecutor(executor, description)
        elif description is not None:
            executor.description = description

        if node_type in self._executors:
            logger.debug(f"Overriding executor for node type: {node_type}")
        self._executors[node_type] = executor

    def unregister(self, node_type: str) -> bool:
        """Remove an executor; returns False if none was registered"""
        return self._executors.pop(node_type, None) is not None

    def get(self, node_type: str) -> Optional[NodeExecutor]:
        return self._executors.get(node_type)

    def is_registered(self, node_type: str) -> bool:
        return node_type in self._executors

    def registered_types(self) -> List[str]:
        return list(self._executors.keys())

    def describe(self, node_type: str) -> Optional[str]:
        executor = self._executors.get(node_type)
        return executor.description if executor else None

    def __contains__(self, node_type: str) -> bool:
        return self.is_registered(node_type)

    def __len__(self) -> int:
        return len(self._executors)


_default_registry: Optional[NodeRegistry] = None


def get_default_registry() -> NodeRegistry:
    """Process-wide fallback registry, used when a runner gets none"""
    global _default_registry
    if _default_registry is None:
        _default_registry = NodeRegistry.with_builtins()
    return _default_registry
