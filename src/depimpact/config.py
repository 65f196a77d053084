"""Configuration management for depimpact."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from depimpact.exceptions import ConfigError

DEPIMPACT_DIR = ".depimpact"
CONFIG_FILE = "config.json"
DEFAULT_GRAPH_PATH = ".github/ai/dep-graph.json"
DEFAULT_REPORT_PATH = ".github/ai/impact.json"


class ImpactConfig(BaseModel):
    """Impact analysis configuration."""

    graph_path: str = DEFAULT_GRAPH_PATH
    report_path: str = DEFAULT_REPORT_PATH
    max_depth: int = Field(default=6, ge=0)
    export_limit: int = Field(default=50, ge=0)
    max_workers: int = Field(default=8, ge=1)
    # Changed files outside these extensions are not analysed
    extensions: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx", ".js", ".jsx", ".py"]
    )


class ExtractorConfig(BaseModel):
    """Graph extractor configuration."""

    source_roots: list[str] = Field(default_factory=lambda: ["src", "app", "server"])
    exclude_patterns: list[str] = Field(
        default_factory=lambda: [
            "node_modules",
            "__pycache__",
            ".git",
            ".github",
            ".depimpact",
            "dist",
            "build",
            "coverage",
            "out",
            ".next",
            ".venv",
            "venv",
            "*.pyc",
            "*.min.js",
        ]
    )
    max_file_size_kb: int = 500


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    root_path: str = "."
    impact: ImpactConfig = Field(default_factory=ImpactConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .depimpact or .git directory."""
    current = (start or Path.cwd()).resolve()
    while True:
        if (current / DEPIMPACT_DIR).is_dir() or (current / ".git").exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def get_depimpact_dir(root: Path) -> Path:
    """Get the .depimpact directory for a project root."""
    return root / DEPIMPACT_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .depimpact/config.json."""
    config_path = get_depimpact_dir(root) / CONFIG_FILE
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return ProjectConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    return ProjectConfig(name=root.name, root_path=str(root))


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .depimpact/config.json."""
    cfg_dir = get_depimpact_dir(root)
    cfg_dir.mkdir(parents=True, exist_ok=True)
    config_path = cfg_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'impact.max_depth')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e


def get_config_value(config: ProjectConfig, key: str) -> Any:
    """Read a nested config value using dot notation."""
    target: Any = config.model_dump()
    for part in key.split("."):
        if not isinstance(target, dict) or part not in target:
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    return target
