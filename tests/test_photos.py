from __future__ import annotations

from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from simple_contacts.errors import PhotoError
from simple_contacts.photos import PhotoIngestor, decode_photo


def test_ingestor_reads_sizes_from_config(monkeypatch):
    from simple_contacts import config

    monkeypatch.setattr(config, "_config_cache", {"photos": {"thumbnail_size": 48, "jpeg_quality": 60, "fetch_timeout": 3}})

    p = PhotoIngestor()

    assert (p.thumbnail_size, p.jpeg_quality, p.fetch_timeout) == (48, 60, 3.0)


def test_explicit_zero_is_not_replaced_by_config(monkeypatch):
    from simple_contacts import config

    monkeypatch.setattr(config, "_config_cache", {"photos": {"thumbnail_size": 48, "jpeg_quality": 60, "fetch_timeout": 3}})

    p = PhotoIngestor(jpeg_quality=0, fetch_timeout=0)

    assert (p.thumbnail_size, p.jpeg_quality, p.fetch_timeout) == (48, 0, 0.0)
    with pytest.raises(ValueError):
        PhotoIngestor(thumbnail_size=0)


def test_encode_produces_square_jpeg_and_flattens_alpha():
    img = Image.new("RGBA", (80, 20), (0, 0, 0, 0))

    data = PhotoIngestor(thumbnail_size=16).encode(img)

    out = Image.open(BytesIO(data))
    assert out.format == "JPEG"
    assert out.size == (16, 16)
    # transparent pixels end up white, not black
    assert out.convert("RGB").getpixel((8, 8))[0] > 200


def test_ingest_local_path(photo_file: Path):
    data = PhotoIngestor(thumbnail_size=24).ingest(str(photo_file))

    assert Image.open(BytesIO(data)).size == (24, 24)


@patch("simple_contacts.photos.requests.get")
def test_http_error_becomes_photo_error(mock_get):
    import requests

    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("404")
    mock_get.return_value = resp

    with pytest.raises(PhotoError):
        PhotoIngestor(thumbnail_size=24).ingest("http://img.example/missing.png")


def test_decode_photo_handles_empty_and_garbage():
    assert decode_photo(None) is None
    assert decode_photo(b"") is None
    assert decode_photo(b"definitely not an image") is None
