"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CORAL__SECTION__KEY)
3. Project YAML (./coral.yaml)
4. Global YAML (~/.config/coral/config.yaml)
5. Built-in defaults (this file)

Examples:
    CORAL__LOGGING__LEVEL=DEBUG
    CORAL__SERVER__PORT=8080
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from coral.config.constants import (
    DEFAULT_CORS_ORIGINS,
    DEFAULT_EXTERNAL_PREFIXES,
    PORT_MAX,
    PORT_MIN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CORAL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG prints every resolution pass.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """Snapshot service configuration.

    Env vars:
        CORAL__SERVER__HOST: Bind address (default: 127.0.0.1)
        CORAL__SERVER__PORT: Port number (default: 3000)
        CORAL__SERVER__STATIC_DIR: Frontend build directory to serve at /
    """

    host: str = Field(
        default="127.0.0.1",
        description="Bind address. Use 0.0.0.0 for network access.",
    )
    port: int = Field(
        default=3000,
        description="Server port.",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),
        description="Origins allowed to call the graph API from a browser.",
    )
    static_dir: str | None = Field(
        default=None,
        description="Directory with a built frontend, served at / when set.",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (PORT_MIN <= v <= PORT_MAX):
            raise ValueError(f"Port must be {PORT_MIN}-{PORT_MAX}, got {v}")
        return v


class AnalyzerConfig(BaseModel):
    """Graph builder configuration.

    Env vars:
        CORAL__ANALYZER__EXTERNAL_PREFIXES: JSON list of path prefixes
    """

    external_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTERNAL_PREFIXES),
        description="Descriptor paths treated as shared external schema.",
    )

    @field_validator("external_prefixes")
    @classmethod
    def validate_prefixes(cls, v: list[str]) -> list[str]:
        if any(not prefix for prefix in v):
            raise ValueError("External prefixes must be non-empty")
        return v


class CoralConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
