"""Configuration for gcode-regions.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class ServerConfig:
    """Tool server configuration."""
    name: str = "gcode-regions"
    transport: str = "stdio"  # "stdio", "sse", "streamable-http"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            name=os.getenv("GCODE_REGIONS_SERVER_NAME", "gcode-regions"),
            transport=os.getenv("GCODE_REGIONS_TRANSPORT", "stdio"),
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            server=ServerConfig.from_env(),
            log_level=os.getenv("GCODE_REGIONS_LOG_LEVEL", "INFO").upper(),
        )
