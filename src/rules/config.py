from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = "twinref.toml"

ReadinessStrategy = Literal["signal", "poll", "delay"]


class ReadinessConfig(BaseModel):
    """How to wait for the TypeScript symbol source before scanning it."""

    model_config = ConfigDict(extra="forbid")

    strategy: ReadinessStrategy = Field(
        default="signal",
        description=(
            "signal: await the source's readiness hook; poll: re-fetch symbol "
            "trees until stable; delay: fixed sleep after opening files"
        ),
    )
    poll_interval_ms: int = Field(
        default=50,
        ge=0,
        description="Pause between two symbol snapshots in poll mode",
    )
    max_polls: int = Field(
        default=20,
        ge=1,
        description="Upper bound on snapshots taken in poll mode",
    )
    delay_ms: int = Field(
        default=100,
        ge=0,
        description="Grace period after opening files in delay mode",
    )


class TwinrefConfig(BaseModel):
    """Configuration for cross-language reference resolution."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(
        default=True,
        description="Gate for every cross-language request",
    )
    strict_export: bool = Field(
        default=False,
        description="Only pair functions whose export state matches",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for workspace files to ignore",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    readiness: ReadinessConfig = Field(
        default_factory=ReadinessConfig,
        description="TypeScript symbol source readiness strategy",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> TwinrefConfig:
    """Load configuration from twinref.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return TwinrefConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return TwinrefConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
