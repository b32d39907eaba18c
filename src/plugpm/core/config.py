"""Configuration: env, paths, registry and proxy settings."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

CONFIG_FILE_NAME = "config.json"


@dataclass
class Config:
    base_dir: Path = field(default_factory=lambda: Path.home() / ".picgo")
    registry: str = ""
    proxy: str = ""
    npm_command: str = "npm"
    log_level: list[str] = field(default_factory=lambda: ["all"])
    # extra environment handed to the package manager
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.base_dir, str):
            self.base_dir = Path(self.base_dir)
        if isinstance(self.log_level, str):
            self.log_level = [self.log_level]

    @property
    def config_path(self) -> Path:
        return self.base_dir / CONFIG_FILE_NAME


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single config.json file to config.

    Settings are read from the top level or from a nested ``settings`` object;
    the nested object wins when both are present.
    """
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return
    if not isinstance(data, dict):
        return

    sources = [data]
    if isinstance(data.get("settings"), dict):
        sources.append(data["settings"])

    for src in sources:
        if isinstance(src.get("registry"), str):
            config.registry = src["registry"]
        if isinstance(src.get("proxy"), str):
            config.proxy = src["proxy"]
        if isinstance(src.get("npmCommand"), str) and src["npmCommand"]:
            config.npm_command = src["npmCommand"]
        level = src.get("logLevel")
        if isinstance(level, str):
            config.log_level = [level]
        elif isinstance(level, list):
            config.log_level = [str(v) for v in level]
        if isinstance(src.get("npmEnv"), dict):
            config.env.update({str(k): str(v) for k, v in src["npmEnv"].items()})


def load_config(
    base_dir: str | Path | None = None,
    registry: str | None = None,
    proxy: str | None = None,
) -> Config:
    """Load config with priority: CLI args > env > .env > config.json > defaults."""
    load_dotenv()

    config = Config()
    if home := os.getenv("PLUGPM_HOME"):
        config.base_dir = Path(home).expanduser()
    if base_dir:
        config.base_dir = Path(base_dir).expanduser()

    _apply_settings(config, config.config_path)

    if env_registry := os.getenv("PLUGPM_REGISTRY"):
        config.registry = env_registry
    if env_proxy := os.getenv("PLUGPM_PROXY"):
        config.proxy = env_proxy
    if env_npm := os.getenv("PLUGPM_NPM"):
        config.npm_command = env_npm

    if registry is not None:
        config.registry = registry
    if proxy is not None:
        config.proxy = proxy

    return config
