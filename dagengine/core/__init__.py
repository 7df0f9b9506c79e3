# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Core utilities and shared modules for the DAG engine.

This package contains:
- config: Configuration management
- errors: Custom exceptions
- logging: Structured logging
"""

from dagengine.core.config import get_config, reload_config, load_config, Config
from dagengine.core.errors import DagEngineError, ValidationError, ConfigurationError
from dagengine.core.logging import get_logger, get_engine_logger, log_event

__all__ = [
    "get_config",
    "reload_config",
    "load_config",
    "Config",
    "DagEngineError",
    "ValidationError",
    "ConfigurationError",
    "get_logger",
    "get_engine_logger",
    "log_event",
]
