"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``BOARDGAME_STATS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance; the statistics engine itself
takes plain arguments and never reads configuration.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Location of the normalized collection export."""

    model_config = ConfigDict(frozen=True)

    data_file: str = "data/data.json"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class RecommendationConfig(BaseModel):
    """Settings for ``suggest``."""

    model_config = ConfigDict(frozen=True)

    recent_days: int = 30
    seed: Optional[int] = None
    cost_club: bool = False

    @field_validator("recent_days")
    @classmethod
    def validate_recent_days(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"recent_days must be > 0, got {v}.")
        return v


class ReportConfig(BaseModel):
    """List lengths used by the text reports."""

    model_config = ConfigDict(frozen=True)

    top_games_limit: int = 3
    longest_plays_limit: int = 5

    @field_validator("top_games_limit", "longest_plays_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Report limits must be > 0, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    report: ReportConfig = ReportConfig()
    debug: bool = False
    """Force DEBUG logging regardless of ``[logging] level``."""


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply BOARDGAME_STATS_* env vars to the raw config dict.

    Supported overrides:
      BOARDGAME_STATS_DATA_FILE    → raw["data"]["data_file"]
      BOARDGAME_STATS_LOG_LEVEL    → raw["logging"]["level"]
      BOARDGAME_STATS_RECENT_DAYS  → raw["recommendations"]["recent_days"]
      BOARDGAME_STATS_COST_CLUB    → raw["recommendations"]["cost_club"]
      BOARDGAME_STATS_DEBUG        → raw["debug"]
    """
    if data_file := os.environ.get("BOARDGAME_STATS_DATA_FILE"):
        raw.setdefault("data", {})["data_file"] = data_file

    if log_level := os.environ.get("BOARDGAME_STATS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if recent_days := os.environ.get("BOARDGAME_STATS_RECENT_DAYS"):
        raw.setdefault("recommendations", {})["recent_days"] = recent_days

    if cost_club := os.environ.get("BOARDGAME_STATS_COST_CLUB"):
        raw.setdefault("recommendations", {})["cost_club"] = _truthy(cost_club)

    if debug := os.environ.get("BOARDGAME_STATS_DEBUG"):
        raw["debug"] = _truthy(debug)

    return raw


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        report=ReportConfig(**raw.get("report", {})),
        debug=raw.get("debug", False),
    )
