"""Contact photo thumbnails: fetch, scale, encode, decode."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from PIL import Image, UnidentifiedImageError

from . import config
from .errors import PhotoError

LOG = logging.getLogger(__name__)


def _flatten(img: Image.Image) -> Image.Image:
    """Return an RGB copy suitable for JPEG (transparency over white)."""
    if img.mode in ("RGBA", "P", "LA"):
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def decode_photo(data: bytes | None) -> Image.Image | None:
    """Decode a stored thumbnail. Empty or unreadable data means no photo."""
    if not data:
        return None
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (OSError, UnidentifiedImageError) as e:
        LOG.debug("Stored photo could not be decoded: %s", e)
        return None
    return img


class PhotoIngestor:
    """Turns photo references and in-memory images into stored thumbnails."""

    def __init__(
        self,
        thumbnail_size: int | None = None,
        jpeg_quality: int | None = None,
        fetch_timeout: float | None = None,
    ):
        if thumbnail_size is None:
            thumbnail_size = config.get("photos.thumbnail_size", 192)
        if jpeg_quality is None:
            jpeg_quality = config.get("photos.jpeg_quality", 80)
        if fetch_timeout is None:
            fetch_timeout = config.get("photos.fetch_timeout", 15)
        self.thumbnail_size = int(thumbnail_size)
        self.jpeg_quality = int(jpeg_quality)
        self.fetch_timeout = float(fetch_timeout)
        if self.thumbnail_size < 1:
            raise ValueError(f"thumbnail_size must be positive, got {self.thumbnail_size}")

    def fetch(self, uri: str) -> bytes:
        """Read the raw bytes behind a photo reference (URL, file:// URI or path)."""
        parsed = urlparse(uri)
        if parsed.scheme in ("http", "https"):
            try:
                r = requests.get(uri, timeout=self.fetch_timeout, headers={"User-Agent": "simple-contacts"})
                r.raise_for_status()
            except requests.RequestException as e:
                raise PhotoError(f"Could not fetch photo {uri}: {e}") from e
            return r.content

        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(uri).expanduser()
        try:
            return path.read_bytes()
        except OSError as e:
            raise PhotoError(f"Could not read photo {uri}: {e}") from e

    def encode(self, img: Image.Image) -> bytes:
        """Scale to the square thumbnail size and encode as JPEG."""
        size = self.thumbnail_size
        scaled = _flatten(img).resize((size, size), Image.Resampling.LANCZOS)
        buf = BytesIO()
        scaled.save(buf, format="JPEG", quality=self.jpeg_quality, optimize=True)
        return buf.getvalue()

    def ingest(self, uri: str) -> bytes:
        data = self.fetch(uri)
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (OSError, UnidentifiedImageError) as e:
            raise PhotoError(f"Not an image: {uri}") from e
        return self.encode(img)
