"""Configuration management for lspbins."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml
from rich.console import Console

console = Console(stderr=True)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/lspbins/config.yaml"


@dataclass
class LspbinsConfig:
    """Configuration for lspbins."""

    work_dir: Path = field(
        default_factory=lambda: Path(os.path.expanduser("~/.cache/lspbins")),
    )
    search_path: str | None = None
    timeout: float = 30

    @classmethod
    def from_dict(cls, data: dict) -> LspbinsConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            console.print(f"⚠️ [yellow]Ignoring unknown configuration key '{key}'[/yellow]")
        config_data = {key: value for key, value in data.items() if key in known}

        # Expand paths
        if isinstance(config_data.get("work_dir"), str):
            config_data["work_dir"] = Path(os.path.expanduser(config_data["work_dir"]))
        if isinstance(config_data.get("search_path"), str):
            config_data["search_path"] = os.pathsep.join(
                os.path.expanduser(part)
                for part in config_data["search_path"].split(os.pathsep)
            )
        return cls(**config_data)

    @classmethod
    def load_from_file(cls, config_path: str | None = None) -> LspbinsConfig:
        """Load configuration from YAML file."""
        if not config_path:
            config_path = os.environ.get("LSPBINS_CONFIG", DEFAULT_CONFIG_PATH)
        config_path = os.path.expanduser(config_path)

        try:
            with open(config_path) as file:
                config_data = yaml.safe_load(file) or {}
        except FileNotFoundError:
            logger.info("Configuration file not found: %s", config_path)
            return cls()
        except yaml.YAMLError:
            console.print(
                f"❌ [bold red]Invalid YAML in configuration file: {config_path}[/bold red]",
            )
            return cls()

        if not isinstance(config_data, dict):
            console.print(
                f"❌ [bold red]Configuration file must contain a mapping: {config_path}[/bold red]",
            )
            return cls()
        return cls.from_dict(config_data)
