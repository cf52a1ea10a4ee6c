from __future__ import annotations

import logging
from pathlib import Path

import pytest

from simple_contacts import config


def test_defaults_without_config_file():
    assert config.find_config_file() is None
    assert config.get("photos.thumbnail_size") == 192
    assert config.get("photos.missing", "fallback") == "fallback"
    assert config.get_section("storage")["path"].endswith("contacts.db")


def test_user_config_is_deep_merged(tmp_path: Path):
    (tmp_path / "config.yaml").write_text("photos:\n  thumbnail_size: 64\nstorage:\n  path: /tmp/x.db\n")

    cfg = config.load_config(reload=True)

    assert cfg["photos"]["thumbnail_size"] == 64
    assert cfg["photos"]["jpeg_quality"] == 80
    assert config.db_path() == Path("/tmp/x.db")


def test_config_is_cached_until_reload(tmp_path: Path):
    first = config.load_config()
    (tmp_path / "config.yaml").write_text("photos:\n  thumbnail_size: 10\n")

    assert config.load_config() is first
    assert config.load_config(reload=True)["photos"]["thumbnail_size"] == 10


def test_broken_yaml_falls_back_to_defaults(tmp_path: Path, caplog):
    (tmp_path / "config.yaml").write_text("photos: [unclosed\n")

    with caplog.at_level(logging.WARNING):
        cfg = config.load_config(reload=True)

    assert cfg["photos"]["thumbnail_size"] == 192
    assert "Could not load config" in caplog.text


def test_db_path_expands_home(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert config.db_path() == tmp_path / ".simple-contacts" / "contacts.db"


def test_init_config_writes_example_once(tmp_path: Path):
    path = config.init_config()

    assert path == tmp_path / "config.yaml"
    assert "thumbnail_size" in path.read_text()
    with pytest.raises(FileExistsError):
        config.init_config()
    assert config.init_config(force=True) == path
