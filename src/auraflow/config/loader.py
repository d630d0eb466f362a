"""Configuration loader for AuraFlow.

This module loads YAML and JSON workflow configurations with environment
variable expansion support.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import WorkflowConfigError
from .schemas import WorkflowConfig, validate_workflow_config

# Pattern for environment variable substitution: ${VAR_NAME} or ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in a value.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: The value to expand (can be str, dict, list)

    Returns:
        The value with environment variables expanded
    """
    if isinstance(value, str):
        def replace_env_var(match: re.Match[str]) -> str:
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(match.group(1), default)

        return ENV_VAR_PATTERN.sub(replace_env_var, value)

    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]

    return value


def load_config_file(
    file_path: str | Path,
    config_type: str = "auto",
    expand_env: bool = True,
) -> dict[str, Any]:
    """Load a configuration file (YAML or JSON).

    Args:
        file_path: Path to the configuration file
        config_type: Type of config ("yaml", "json", or "auto" to detect from extension)
        expand_env: Whether to expand environment variables

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file type is unsupported
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    if config_type == "auto":
        suffix = path.suffix.lower()
        if suffix in [".yaml", ".yml"]:
            config_type = "yaml"
        elif suffix == ".json":
            config_type = "json"
        else:
            raise ValueError(f"Cannot detect config type from extension: {suffix}")

    with open(path, "r", encoding="utf-8") as f:
        if config_type == "yaml":
            config = yaml.safe_load(f) or {}
        elif config_type == "json":
            config = json.load(f)
        else:
            raise ValueError(f"Unsupported config type: {config_type}")

    if expand_env:
        config = _expand_env_vars(config)

    return config


def load_workflow_config(file_path: str | Path) -> WorkflowConfig:
    """Load and validate a workflow configuration file.

    Args:
        file_path: Path to the workflow configuration file

    Returns:
        Validated WorkflowConfig object

    Raises:
        FileNotFoundError: If the file doesn't exist
        WorkflowConfigError: If the configuration is invalid
    """
    config_data = load_config_file(file_path)
    # Accept both a bare workflow and one wrapped in a "workflow" key
    if "workflow" in config_data and isinstance(config_data["workflow"], dict):
        config_data = config_data["workflow"]
    try:
        return validate_workflow_config(config_data)
    except ValidationError as e:
        raise WorkflowConfigError(f"Invalid workflow configuration in {file_path}: {e}") from e
