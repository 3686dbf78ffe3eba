"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``     : committed static defaults
  2. ``config/local.toml``       : optional local overrides (gitignored)
  3. ``.env``                    : local env overrides (gitignored)
  4. Environment variables       : ``REORDER_PLANNER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Scoring weights are fixed constants in ``reorder_planner.scoring.scorer``, not
config values.
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
    """Filesystem paths for input workbooks and exported CSV files."""

    model_config = ConfigDict(frozen=True)

    input_dir: str = "data/input"
    output_dir: str = "data/outputs"


class PlanningConfig(BaseModel):
    """Reorder run defaults."""

    model_config = ConfigDict(frozen=True)

    default_budget: float = 200.0
    reorder_filename_prefix: str = "recommended_reorders"
    backlog_filename_prefix: str = "backlog"
    export_quantity: int = 1

    @field_validator("default_budget")
    @classmethod
    def validate_default_budget(cls, v: float) -> float:
        if not v >= 0.0 or v == float("inf"):
            raise ValueError(f"default_budget must be a finite number >= 0, got {v}.")
        return v

    @field_validator("export_quantity")
    @classmethod
    def validate_export_quantity(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"export_quantity must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/reorder_planner.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    The CLI and ``ReorderStage`` receive an ``AppConfig`` instance built by
    ``load_config()``, which merges TOML + .env + environment overrides.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    planning: PlanningConfig = PlanningConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


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
        FileNotFoundError: If the specified ``config_path`` does not exist.
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
            "Create config/default.toml or pass --config explicitly."
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
    """Apply REORDER_PLANNER_* env vars to the raw config dict.

    Supported overrides:
      REORDER_PLANNER_OUTPUT_DIR      → raw["data"]["output_dir"]
      REORDER_PLANNER_DEFAULT_BUDGET  → raw["planning"]["default_budget"]
      REORDER_PLANNER_LOG_LEVEL       → raw["logging"]["level"]
      REORDER_PLANNER_DEBUG           → raw["debug"]
    """
    if output_dir := os.environ.get("REORDER_PLANNER_OUTPUT_DIR"):
        raw.setdefault("data", {})["output_dir"] = output_dir

    if budget := os.environ.get("REORDER_PLANNER_DEFAULT_BUDGET"):
        raw.setdefault("planning", {})["default_budget"] = budget

    if log_level := os.environ.get("REORDER_PLANNER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("REORDER_PLANNER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        planning=PlanningConfig(**raw.get("planning", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
