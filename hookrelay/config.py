"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hookrelay.utils.platform import get_config_dir


class ServerConfig(BaseModel):
    bind: str = "0.0.0.0"
    port: int = 3000
    path: str = "/api/github"
    max_body_size: int = 25 * 1024 * 1024  # GitHub caps payloads at 25 MB


class DiscordConfig(BaseModel):
    webhook_url: str = ""
    timeout: float = 10.0  # seconds, 0 disables


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOOKRELAY_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    secret: str = ""
    server: ServerConfig = Field(default_factory=ServerConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Env vars win over YAML values passed as init kwargs
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def secret_bytes(self) -> bytes:
        return self.secret.encode("utf-8")


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("HOOKRELAY_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)
