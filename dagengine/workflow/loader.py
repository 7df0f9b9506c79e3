# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Loader - read workflow definitions from JSON or YAML files
"""

import json
from pathlib import Path
from typing import Union

import yaml

from dagengine.core.config import get_config
from dagengine.core.logging import get_engine_logger

from .exceptions import WorkflowValidationError
from .models import Workflow
from .schema import parse_workflow

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def load_workflow(path: Union[str, Path]) -> Workflow:
    """
    Load a workflow definition from disk.

    Args:
        path: .json, .yaml or .yml file. Relative paths are resolved
            against the configured workflows directory.

    Returns:
        Validated Workflow

    Raises:
        FileNotFoundError: If the file doesn't exist
        WorkflowValidationError: If the file can't be parsed or is not a workflow
    """
    workflow_path = Path(path)
    if not workflow_path.is_absolute():
        workflow_path = Path(get_config().workflows_path) / workflow_path

    suffix = workflow_path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise WorkflowValidationError(
            f"Unsupported workflow file type '{suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    if not workflow_path.exists():
        raise FileNotFoundError(f"Workflow not found: {workflow_path}")

    text = workflow_path.read_text()
    try:
        if suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise WorkflowValidationError(f"Could not parse {workflow_path.name}: {e}")

    workflow = parse_workflow(data)
    get_engine_logger("loader").info(
        f"Loaded workflow '{workflow.metadata.id}' from {workflow_path} "
        f"({len(workflow.nodes)} nodes, {len(workflow.edges)} edges)"
    )
    return workflow
