"""Configuration management for transcode dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_FFMPEG_BINARY, DEFAULT_INPUT_DIR

LOG = logging.getLogger(__name__)


# Configuration singleton
class _ConfigSingleton:
    """Configuration singleton holder."""

    _instance: DispatchConfig | None = None

    @classmethod
    def get_instance(cls) -> DispatchConfig:
        """Get the configuration instance."""
        if cls._instance is None:
            # Try to load from default config file in the working directory
            config_path = Path.cwd() / "config.yaml"
            if config_path.exists():
                cls._instance = DispatchConfig.load_from_file(config_path)
            else:
                cls._instance = DispatchConfig()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


_config_singleton = _ConfigSingleton()


@dataclass
class ProfileConfig:
    """Profile definition as read from config.yaml."""

    extension: str
    arguments: list[str]
    selectors: list[str] = field(default_factory=list)
    description: str = ""


@dataclass
class GlobalConfig:
    """Global settings."""

    input_dir: str = DEFAULT_INPUT_DIR
    output_dir: str | None = None  # Defaults to the working directory's base name
    ffmpeg_binary: str = DEFAULT_FFMPEG_BINARY
    max_workers: int | None = None
    log_level: str = "WARNING"


@dataclass
class DispatchConfig:
    """Main configuration class."""

    global_: GlobalConfig = field(default_factory=GlobalConfig)
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)

    @classmethod
    def load_from_file(cls, config_path: Path) -> DispatchConfig:
        """Load configuration from YAML file."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            return cls._from_dict(data)
        except (OSError, yaml.YAMLError) as e:
            LOG.warning("Failed to load config from %s: %s", config_path, e)
            return cls()

    def resolve_input_dir(self, cwd: Path) -> Path:
        """Absolute input directory for a run started in ``cwd``."""
        return cwd / self.global_.input_dir

    def resolve_output_dir(self, cwd: Path) -> Path:
        """Absolute output directory for a run started in ``cwd``."""
        return cwd / (self.global_.output_dir or cwd.name)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> DispatchConfig:
        """Create config from dictionary."""
        if not isinstance(data, dict):
            LOG.warning("Ignoring config: expected a mapping at top level, got %s", type(data).__name__)
            return cls()

        global_config = cls._parse_global_config(data.get("global") or {})
        profiles = cls._parse_profiles(data.get("profiles") or {})

        return cls(global_=global_config, profiles=profiles)

    @classmethod
    def _parse_profiles(cls, profiles_data: dict[str, Any]) -> dict[str, ProfileConfig]:
        """Parse profile definitions."""
        profiles = {}
        for name, profile_data in profiles_data.items():
            try:
                if isinstance(profile_data, dict) and "extension" in profile_data and "arguments" in profile_data:
                    arguments = profile_data["arguments"]
                    if isinstance(arguments, str):
                        arguments = arguments.split()
                    selectors = profile_data.get("selectors", [name])
                    if not isinstance(selectors, list):
                        selectors = [selectors]
                    profiles[str(name)] = ProfileConfig(
                        extension=str(profile_data["extension"]).lstrip("."),
                        arguments=[str(arg) for arg in arguments],
                        selectors=[str(s) for s in selectors],
                        description=profile_data.get("description", ""),
                    )
                else:
                    LOG.warning("Incomplete profile data for '%s': missing required fields", name)
            except (TypeError, ValueError) as e:
                LOG.warning("Failed to load profile '%s': %s", name, e)

        return profiles

    @classmethod
    def _parse_global_config(cls, global_data: dict[str, Any]) -> GlobalConfig:
        """Parse global configuration."""
        max_workers = global_data.get("max_workers")
        if max_workers is not None:
            try:
                max_workers = int(max_workers)
            except (TypeError, ValueError):
                LOG.warning("Invalid max_workers '%s'. Using detected parallelism.", max_workers)
                max_workers = None

        output_dir = global_data.get("output_dir")

        return GlobalConfig(
            input_dir=str(global_data.get("input_dir", DEFAULT_INPUT_DIR)),
            output_dir=str(output_dir) if output_dir is not None else None,
            ffmpeg_binary=str(global_data.get("ffmpeg_binary", DEFAULT_FFMPEG_BINARY)),
            max_workers=max_workers,
            log_level=str(global_data.get("log_level", "WARNING")).upper(),
        )


def get_config() -> DispatchConfig:
    """Get the global configuration instance."""
    return _config_singleton.get_instance()
