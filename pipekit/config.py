"""Configuration loading for pipekit.

Settings come from a ``pipekit.yaml`` file found in the working
directory or one of its parents:

    verbose: true
    step: false
    breakpoints: true
    variables:
      target: dist
      version: 1.2.0
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from pipekit.errors import PipeError

CONFIG_FILENAME = "pipekit.yaml"


class PipekitConfig(BaseModel):
    """Settings applied to the root pipe of a run."""

    verbose: bool = Field(default=False, description="Log pipe lifecycle at INFO level")
    step: bool = Field(default=False, description="Pause at every breakpoint")
    breakpoints: bool | None = Field(
        default=None,
        description="Pause at :break directives (None: only when stdin is a TTY)",
    )
    variables: dict[str, Any] = Field(
        default_factory=dict, description="Initial variable bindings"
    )


def find_config(start: Path | None = None) -> Path | None:
    """Find pipekit.yaml in the given directory or its parents."""
    cwd = (start or Path.cwd()).resolve()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path | None = None) -> PipekitConfig:
    """Load configuration from a file, or defaults when there is none."""
    if path is None:
        return PipekitConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise PipeError(f"Cannot read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise PipeError(f"Config {path} must be a mapping")

    try:
        return PipekitConfig.model_validate(data)
    except ValidationError as e:
        raise PipeError(f"Invalid config {path}: {e}") from e
