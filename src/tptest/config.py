"""Configuration management for TPTest.

Loads and validates tpt.yaml configuration files.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAMES = ("tpt.yaml", "tpt.yml", ".tpt.yaml", ".tpt.yml")


class TPTConfig(BaseModel):
    """Root configuration for TPTest."""

    version: str = "0.1"
    """Config file version."""

    verbose: bool = False
    """Report passing assertions as well as failures."""

    test_marker: str = Field(default="it", min_length=1)
    """Substring that marks a method as a test."""

    spec_paths: list[str] = Field(default_factory=lambda: ["spec"])
    """Files or directories to search for test cases."""

    file_pattern: str = "*.py"
    """Glob used to pick spec files inside spec_paths directories."""

    source_paths: list[str] = Field(default_factory=list)
    """Paths to add to sys.path before importing spec files."""

    capture_output: bool = False
    """Capture stdout/stderr while each test method runs."""

    debug_mode: bool = False
    """Enable verbose debug logging."""

    @field_validator("spec_paths", "source_paths", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [v]
        return v


def find_config(project_root: Path) -> Path | None:
    """Return the first config file present in ``project_root``."""
    for name in CONFIG_FILENAMES:
        candidate = project_root / name
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: Path | None = None, project_root: Path | None = None) -> TPTConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file. If None, searches for tpt.yaml.
        project_root: Project root directory. Defaults to cwd.

    Returns:
        Parsed configuration. Returns default config if no file found.
    """
    project_root = project_root or Path.cwd()

    if config_path is None:
        config_path = find_config(project_root)

    # No config file - return defaults
    if config_path is None or not config_path.exists():
        return TPTConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return TPTConfig.model_validate(data)


def resolve_paths(config: TPTConfig, project_root: Path) -> TPTConfig:
    """Resolve relative paths in config to absolute paths.

    Args:
        config: The configuration to update.
        project_root: Base directory for relative paths.

    Returns:
        Config with resolved paths (new instance).
    """

    def resolve(p: str) -> str:
        return p if Path(p).is_absolute() else str((project_root / p).resolve())

    return config.model_copy(
        update={
            "spec_paths": [resolve(p) for p in config.spec_paths],
            "source_paths": [resolve(p) for p in config.source_paths],
        }
    )
