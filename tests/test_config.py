"""Tests for shrinkray.config."""

from pathlib import Path
from unittest.mock import patch

from shrinkray import config


class TestConfig:
    def test_defaults_loaded(self):
        cfg = config.get_config()
        assert cfg["storage_key"] == "shrink-ray-state"
        assert cfg["day_check_seconds"] == 60

    def test_relative_paths_resolve_to_package(self, monkeypatch):
        monkeypatch.delenv("SHRINKRAY_PUZZLES_PATH", raising=False)
        assert config.puzzles_path() == Path(config.__file__).resolve().parent / "puzzles.json"

    def test_env_overrides_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHRINKRAY_STORAGE_PATH", str(tmp_path))
        assert config.storage_path() == tmp_path

    def test_patched_config(self, monkeypatch):
        monkeypatch.delenv("SHRINKRAY_PUZZLES_PATH", raising=False)
        with patch("shrinkray.config._config", {"puzzles_path": "/srv/book.json"}):
            assert config.puzzles_path() == Path("/srv/book.json")
