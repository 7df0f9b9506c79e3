# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Shared pytest fixtures for engine tests
"""

import asyncio
import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import dagengine.core.config as config_module
from dagengine.workflow.registry import NodeRegistry


@pytest.fixture(autouse=True)
def reset_config(monkeypatch, tmp_path):
    """Isolate every test from the developer's config file and env"""
    monkeypatch.setenv("DAGENGINE_CONFIG_PATH", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("DAGENGINE_TIMEOUT_MS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def registry():
    """Built-in executors plus test doubles"""
    registry = NodeRegistry.with_builtins()

    async def echo(config, inputs):
        return {"nodeId": config.node_id, "input": inputs, "output": "test-result"}

    async def failing(config, inputs):
        raise RuntimeError("Deliberate test error")

    async def slow(config, inputs):
        await asyncio.sleep(0.1)
        return {"result": "slow-result"}

    registry.register("test", echo)
    registry.register("failing", failing)
    registry.register("slow", slow)
    return registry
