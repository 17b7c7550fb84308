"""Configuration loading utilities for the quavertrack chart service."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .utils.time import MS_PER_DAY

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "settings.yaml"


class ChartSettings(BaseModel):
    window_padding_ms: int = Field(MS_PER_DAY, ge=0)
    axis_offset_ratio: float = Field(0.05, ge=0.0)
    default_zoom_start: float = Field(0.0, ge=0.0, le=100.0)
    default_zoom_end: float = Field(100.0, ge=0.0, le=100.0)


class HiscoreSettings(BaseModel):
    new_score_symbol: str = "diamond"
    new_score_symbol_size: int = Field(14, ge=1)
    default_symbol_size: int = Field(8, ge=1)


class DiffColorSettings(BaseModel):
    increase: str = "#5bc762"
    decrease: str = "#e0607e"
    same: str = "#cccccc"


class UISettings(BaseModel):
    grade_colors: Dict[str, str] = Field(default_factory=dict)
    diff_colors: DiffColorSettings = Field(default_factory=DiffColorSettings)


class ApiSettings(BaseModel):
    title: str = "quavertrack charts"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseModel):
    chart: ChartSettings = Field(default_factory=ChartSettings)
    hiscores: HiscoreSettings = Field(default_factory=HiscoreSettings)
    ui: UISettings = Field(default_factory=UISettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: Path | str | None = None) -> Settings:
    """Load application settings from YAML and environment variables.

    An explicit ``path`` (or ``QUAVERTRACK_CONFIG``) must exist; the bundled
    default file is optional and falls back to built-in defaults.
    """
    load_dotenv()
    explicit = path if path is not None else os.getenv("QUAVERTRACK_CONFIG")
    if explicit:
        raw = _load_yaml(Path(explicit))
    elif DEFAULT_CONFIG_PATH.exists():
        raw = _load_yaml(DEFAULT_CONFIG_PATH)
    else:
        raw = {}
    settings = Settings.model_validate(raw)

    # allow overriding via environment variables
    padding = os.getenv("QUAVERTRACK_PADDING_MS")
    if padding:
        try:
            settings.chart.window_padding_ms = max(0, int(padding))
        except ValueError as exc:
            raise ValueError(f"QUAVERTRACK_PADDING_MS must be an integer: {padding!r}") from exc
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
