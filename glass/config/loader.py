"""YAML loader for the config subsystem.

``load_app_config`` consumes one YAML file, validates it via models.py and
returns a typed :class:`AppConfig`. The path defaults to ``config/app.yml``
and can be redirected with the ``GLASS_CONFIG_PATH`` environment variable.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml

from .models import AppConfig

_DEFAULT_CONFIG_DIR = Path("config")
CONFIG_PATH_ENV = "GLASS_CONFIG_PATH"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def resolve_config_path(path: Path | str | None = None) -> Path:
    """Return the explicit path, the env override, or ``config/app.yml``."""

    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return _DEFAULT_CONFIG_DIR / "app.yml"


def load_app_config(path: Path | str | None = None) -> AppConfig:
    """Load app.yml (http, sources, team, telemetry sections)."""

    data = _read_yaml(resolve_config_path(path))
    return AppConfig.model_validate(data)
