"""Configuration loading."""

from dataclasses import dataclass
from pathlib import Path

import yaml

from .crawler.registry_client import DEFAULT_TIMEOUT, MAX_PAGE_SIZE, MCP_REGISTRY_URL
from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config/config.yaml")

OUTPUT_FORMATS = ("text", "json")


@dataclass
class Settings:
    """Resolved settings for one run."""
    registry_url: str = MCP_REGISTRY_URL
    page_size: int = MAX_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT
    output_format: str = "text"
    output_path: Path | None = None


def load_config(config_path: Path | None = None) -> Settings:
    """Load settings from a YAML file.

    With no path the default location is tried and silently skipped when it
    does not exist. A path given explicitly must exist.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return Settings()
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    return settings_from_dict(raw)


def settings_from_dict(raw: dict) -> Settings:
    """Build settings from the parsed YAML structure."""
    registry = raw.get("registry") or {}
    output = raw.get("output") or {}
    if not isinstance(registry, dict) or not isinstance(output, dict):
        raise ConfigError("'registry' and 'output' sections must be mappings")

    try:
        page_size = int(registry.get("page_size", MAX_PAGE_SIZE))
        timeout = float(registry.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid registry setting: {e}") from e

    if timeout <= 0:
        raise ConfigError("registry.timeout must be positive")

    output_format = output.get("format", "text")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}"
        )

    output_path = output.get("path")

    return Settings(
        registry_url=registry.get("url") or MCP_REGISTRY_URL,
        page_size=max(1, min(page_size, MAX_PAGE_SIZE)),
        timeout=timeout,
        output_format=output_format,
        output_path=Path(output_path) if output_path else None,
    )
