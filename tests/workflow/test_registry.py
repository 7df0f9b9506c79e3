# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for the executor registry and built-in executors
"""

import pytest

from dagengine.workflow.exceptions import NodeExecutionException
from dagengine.workflow.registry import (
    BUILTIN_EXECUTORS,
    NodeExecutionConfig,
    NodeExecutor,
    NodeRegistry,
    get_default_registry,
)


class UpperExecutor(NodeExecutor):
    description = "Uppercases its text input"

    async def execute(self, config, inputs):
        return {"text": inputs.get("text", "").upper()}


def config_for(node_type: str, **data) -> NodeExecutionConfig:
    return NodeExecutionConfig(node_id="n1", node_type=node_type, node_data=data)


class TestRegistration:
    """Test register/get/unregister"""

    def test_register_new_node_type(self):
        registry = NodeRegistry()
        registry.register("upper", UpperExecutor())

        assert registry.is_registered("upper")
        assert "upper" in registry
        assert registry.registered_types() == ["upper"]

    def test_unregistered_type_returns_none(self):
        assert NodeRegistry().get("missing") is None

    def test_register_async_function(self):
        registry = NodeRegistry()

        async def handler(config, inputs):
            return {"id": config.node_id}

        registry.register("fn", handler, description="Function handler")

        assert isinstance(registry.get("fn"), NodeExecutor)
        assert registry.describe("fn") == "Function handler"

    def test_register_rejects_non_callable(self):
        with pytest.raises(TypeError, match="async function"):
            NodeRegistry().register("bogus", "not-an-executor")

    @pytest.mark.asyncio
    async def test_last_registration_wins(self):
        registry = NodeRegistry()

        async def first(config, inputs):
            return {"version": 1}

        async def second(config, inputs):
            return {"version": 2}

        registry.register("custom", first)
        registry.register("custom", second)

        output = await registry.get("custom").execute(config_for("custom"), {})
        assert output == {"version": 2}
        assert len(registry) == 1

    def test_unregister(self):
        registry = NodeRegistry.with_builtins()

        assert registry.unregister("text") is True
        assert registry.unregister("text") is False
        assert registry.get("text") is None

    def test_registries_are_isolated(self):
        one = NodeRegistry.with_builtins()
        two = NodeRegistry.with_builtins()

        one.register("extra", UpperExecutor())

        assert not two.is_registered("extra")

    def test_builtins_present(self):
        registry = NodeRegistry.with_builtins()

        assert set(registry.registered_types()) == set(BUILTIN_EXECUTORS)
        assert registry.describe("video") == "Video node that handles video metadata"

    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()
        assert get_default_registry().is_registered("text")


class TestBuiltinExecutors:
    """Test text/image/video passthrough executors"""

    @pytest.mark.asyncio
    async def test_text_node(self):
        executor = NodeRegistry.with_builtins().get("text")

        output = await executor.execute(config_for("text", label="Greeting", content="hi"), {})

        assert output == {"content": "hi", "label": "Greeting"}

    @pytest.mark.asyncio
    async def test_text_node_defaults(self):
        executor = NodeRegistry.with_builtins().get("text")

        output = await executor.execute(config_for("text"), {})

        assert output == {"content": "", "label": "Text Node"}

    @pytest.mark.asyncio
    async def test_image_node(self):
        executor = NodeRegistry.with_builtins().get("image")

        output = await executor.execute(
            config_for("image", label="Pic", url="a.png", width=640, height=480), {}
        )

        assert output == {
            "url": "a.png",
            "alt": "",
            "width": 640,
            "height": 480,
            "label": "Pic",
        }

    @pytest.mark.asyncio
    async def test_video_node(self):
        executor = NodeRegistry.with_builtins().get("video")

        output = await executor.execute(config_for("video", label="Clip", duration=12.5), {})

        assert output == {
            "url": "",
            "format": "mp4",
            "duration": 12.5,
            "label": "Clip",
        }

    @pytest.mark.asyncio
    async def test_inputs_override_node_data(self):
        executor = NodeRegistry.with_builtins().get("text")

        output = await executor.execute(
            config_for("text", label="Mine", content="own"),
            {"content": "upstream", "extra": 1},
        )

        assert output == {"content": "upstream", "label": "Mine", "extra": 1}

    @pytest.mark.asyncio
    async def test_executor_error_propagates(self):
        registry = NodeRegistry()

        async def broken(config, inputs):
            raise NodeExecutionException(config.node_id, "bad input", code="BAD_INPUT")

        registry.register("broken", broken)

        with pytest.raises(NodeExecutionException, match="bad input") as exc_info:
            await registry.get("broken").execute(config_for("broken"), {})
        assert exc_info.value.code == "BAD_INPUT"
