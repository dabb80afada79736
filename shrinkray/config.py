"""Centralized config loading — read once at import time."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _PACKAGE_DIR.parent
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

_config = yaml.safe_load(CONFIG_PATH.read_text())


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config


def _resolve(env_var: str, key: str) -> Path:
    path = Path(os.getenv(env_var) or get_config()[key])
    return path if path.is_absolute() else _PACKAGE_DIR / path


def puzzles_path() -> Path:
    return _resolve("SHRINKRAY_PUZZLES_PATH", "puzzles_path")


def storage_path() -> Path:
    return _resolve("SHRINKRAY_STORAGE_PATH", "storage_path")
