"""Load runner settings from .flow-exec.yml + environment overrides."""

import os
from dataclasses import dataclass

import yaml

CONFIG_FILE = ".flow-exec.yml"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    verbose: bool = False
    indent: int = 2
    chunk_size: int = 4096


def parse_settings(data: dict | None) -> Settings:
    """Build Settings from a parsed YAML mapping. Unknown keys are ignored."""
    data = data or {}
    settings = Settings(
        verbose=bool(data.get("verbose", False)),
        indent=int(data.get("indent", 2)),
        chunk_size=int(data.get("chunk_size", 4096)),
    )
    if settings.chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {settings.chunk_size}")
    if settings.indent < 0:
        raise ValueError(f"indent must not be negative, got {settings.indent}")
    return settings


def _config_path(path: str | None) -> str | None:
    """Order: explicit path → FLOW_EXEC_CONFIG env → .flow-exec.yml (if present)."""
    if path:
        return path
    env_path = os.environ.get("FLOW_EXEC_CONFIG")
    if env_path:
        return env_path
    if os.path.isfile(CONFIG_FILE):
        return CONFIG_FILE
    return None


def load_settings(path: str | None = None) -> Settings:
    data = None
    config_path = _config_path(path)
    if config_path is not None:
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            data = None

    settings = parse_settings(data)
    env_verbose = os.environ.get("FLOW_EXEC_VERBOSE")
    if env_verbose is not None:
        settings.verbose = env_verbose.strip().lower() in _TRUTHY
    return settings
