"""Pytest configuration and fixtures."""
from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from simple_contacts import config
from simple_contacts.photos import PhotoIngestor
from simple_contacts.storage import open_storage


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path):
    """Never read the developer's real config file."""
    monkeypatch.setattr(config, "CONFIG_PATHS", [tmp_path / "config.yaml"])
    monkeypatch.setattr(config, "_config_cache", None)


@pytest.fixture
def storage():
    s = open_storage(":memory:", photos=PhotoIngestor(thumbnail_size=32, jpeg_quality=80, fetch_timeout=1))
    yield s
    s.close()


@pytest.fixture
def photo_file(tmp_path: Path) -> Path:
    path = tmp_path / "face.png"
    Image.new("RGBA", (100, 60), (200, 30, 30, 255)).save(path)
    return path


class FakeDirectory:
    """In-memory stand-in for the system contacts directory."""

    def __init__(self):
        self.contacts = []
        self.groups = []
        self.deleted_contacts: list[int] = []
        self.deleted_groups: list[int] = []
        self.renamed = []

    def get_contacts(self):
        return list(self.contacts)

    def get_groups(self):
        return list(self.groups)

    def delete_contacts(self, ids):
        self.deleted_contacts.extend(ids)

    def delete_group(self, group_id):
        self.deleted_groups.append(group_id)

    def rename_group(self, group):
        self.renamed.append(group)
        return True


@pytest.fixture
def fake_directory():
    return FakeDirectory()
