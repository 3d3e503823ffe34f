"""Load application settings from a TOML file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from db import DEFAULT_DB_URL
from domain.ratings.mmr import MmrParameters
from logging_config import LOG_LEVELS

DB_URL_ENV_VAR = "TENNIS_TINDER_DB_URL"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "tennis_tinder.toml"


@dataclass(frozen=True)
class AppConfig:
    """Resolved settings for one CLI/process run."""

    file_path: Path | None
    db_url: str
    log_level: str
    mmr: MmrParameters


def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Read and validate a config file; a missing default file falls back to built-in defaults."""
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return _parse_app_config({}, None)
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if not config_path.is_file():
        raise IsADirectoryError(f"Config path is not a file: {config_path}")

    with config_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_app_config(raw, config_path)


def _parse_app_config(raw: dict[str, Any], file_path: Path | None) -> AppConfig:
    label = str(file_path) if file_path is not None else "<defaults>"
    database_raw = raw.get("database", {})
    mmr_raw = raw.get("mmr", {})
    logging_raw = raw.get("logging", {})

    db_url = os.getenv(DB_URL_ENV_VAR) or str(database_raw.get("url", DEFAULT_DB_URL)).strip()
    if not db_url:
        raise ValueError(f"{label}: [database].url must not be empty")

    log_level = str(logging_raw.get("level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"{label}: [logging].level must be one of {sorted(LOG_LEVELS)}")

    parameters = MmrParameters(
        initial_rating=int(mmr_raw.get("initial_rating", 1200)),
        k_factor=int(mmr_raw.get("k_factor", 32)),
        scale_factor=float(mmr_raw.get("scale_factor", 400.0)),
        competitive_threshold=int(mmr_raw.get("competitive_threshold", 200)),
    )
    _validate_parameters(label=label, parameters=parameters)

    return AppConfig(
        file_path=file_path,
        db_url=db_url,
        log_level=log_level,
        mmr=parameters,
    )


def _validate_parameters(*, label: str, parameters: MmrParameters) -> None:
    if parameters.initial_rating <= 0:
        raise ValueError(f"{label}: [mmr].initial_rating must be > 0")
    if parameters.k_factor <= 0:
        raise ValueError(f"{label}: [mmr].k_factor must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{label}: [mmr].scale_factor must be > 0")
    if parameters.competitive_threshold <= 0:
        raise ValueError(f"{label}: [mmr].competitive_threshold must be > 0")


__all__ = ["AppConfig", "DB_URL_ENV_VAR", "DEFAULT_CONFIG_PATH", "load_app_config"]
