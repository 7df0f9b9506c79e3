# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Engine configuration - single source of truth.

Values come from a YAML file; environment variables only select the file
and override the few settings operators tune per process.
"""

import os
import logging
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dagengine.core.errors import ConfigurationError


DEFAULT_CONFIG_PATH = "configs/engine.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable engine configuration.
    """

    # -- Runner --
    timeout_ms: int = 30000
    # Reserved: accepted and stored, never consulted by the scheduler.
    concurrency: int = 1

    # -- Paths --
    workflows_path: str = "workflows"

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self):
        if not isinstance(self.timeout_ms, int) or self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be a positive integer, got {self.timeout_ms!r}")
        if not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigurationError(f"concurrency must be >= 1, got {self.concurrency!r}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format}")


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load configuration from YAML.
    Returns defaults if file doesn't exist.
    """
    y = {}
    if Path(path).exists():
        try:
            with open(path) as f:
                y = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", config_file=path)
        if not isinstance(y, dict):
            raise ConfigurationError("Config root must be a mapping", config_file=path)
    else:
        logger.debug(f"Config not found at {path}, using defaults")

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    timeout_env = os.getenv("DAGENGINE_TIMEOUT_MS")
    try:
        timeout_ms = int(timeout_env) if timeout_env else get(y, "runner", "timeout_ms", default=30000)
    except ValueError:
        raise ConfigurationError(f"DAGENGINE_TIMEOUT_MS must be an integer, got {timeout_env!r}")

    return Config(
        # Runner
        timeout_ms=timeout_ms,
        concurrency=get(y, "runner", "concurrency", default=1),

        # Paths
        workflows_path=get(y, "paths", "workflows", default="workflows"),

        # Logging
        log_level=os.getenv("LOG_LEVEL") or get(y, "logging", "level", default="INFO"),
        log_format=get(y, "logging", "format", default="json"),
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("DAGENGINE_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()
