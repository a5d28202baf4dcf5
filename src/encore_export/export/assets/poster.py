"""
Module: export.assets.poster

Purpose:
    Fetch the tour poster image for show day sheets and covers.
    Fetching degrades gracefully: any failure yields None and the
    composer draws a placeholder instead.

Key Classes:
    - PosterProvider: Abstract base class for poster access
    - UrlPosterProvider: Downloads posters over HTTP(S)
    - StaticPosterProvider: Serves pre-loaded images (tests, offline hosts)
    - CachingPosterProvider: Per-selection memoization of another provider
    - PosterFetchError: Raised internally by provider implementations

Dependencies:
    - PIL: Image decoding
    - urllib (std): HTTP download

Used By:
    - export.controller: One fetch per preview/export
    - export.session: Default provider
"""

from __future__ import annotations

import io
import logging
import threading
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
# Posters are a few hundred KB; refuse anything absurd
MAX_POSTER_BYTES = 20 * 1024 * 1024


class PosterFetchError(Exception):
    """Poster could not be downloaded or decoded."""
    pass


class PosterProvider(ABC):
    """
    Abstract interface for poster images.

    Subclasses implement `_load()`; `fetch()` turns every failure into
    None so callers never abort an export over a missing poster.
    """

    def fetch(self, url: Optional[str]) -> Optional[Image.Image]:
        """
        Fetch a poster.

        Args:
            url: Poster URL, or None when the tour has no poster

        Returns:
            Decoded RGB image, or None if missing or unavailable
        """
        if not url:
            return None
        try:
            image = self._load(url)
        except PosterFetchError as e:
            logger.warning(f"Poster unavailable, using placeholder: {e}")
            return None
        logger.debug(f"Fetched poster {image.width}x{image.height} from {url}")
        return image

    @abstractmethod
    def _load(self, url: str) -> Image.Image:
        """
        Load and decode a poster.

        Raises:
            PosterFetchError: If the poster cannot be loaded
        """


class UrlPosterProvider(PosterProvider):
    """
    Downloads posters with urllib.

    Args:
        timeout: Socket timeout in seconds
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S):
        self.timeout = timeout

    def _load(self, url: str) -> Image.Image:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": "encore-export"})
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                data = response.read(MAX_POSTER_BYTES + 1)
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise PosterFetchError(f"Failed to download {url}: {e}") from e

        if len(data) > MAX_POSTER_BYTES:
            raise PosterFetchError(f"Poster at {url} exceeds {MAX_POSTER_BYTES} bytes")
        return decode_poster(data, source=url)


class StaticPosterProvider(PosterProvider):
    """
    Serves images from a dict keyed by URL.

    Example:
        >>> provider = StaticPosterProvider({"https://x/p.png": img})
        >>> provider.fetch("https://x/p.png") is not None
        True
    """

    def __init__(self, images: Optional[Dict[str, Image.Image]] = None):
        self.images = dict(images or {})
        self.requests: list[str] = []

    def _load(self, url: str) -> Image.Image:
        self.requests.append(url)
        try:
            return self.images[url].convert("RGB")
        except KeyError:
            raise PosterFetchError(f"No poster registered for {url}") from None


def decode_poster(data: bytes, source: str = "<bytes>") -> Image.Image:
    """
    Decode image bytes into a fully loaded RGB image.

    Raises:
        PosterFetchError: If the bytes are not a readable image, or the
            image dimensions exceed Pillow's decompression bomb limit
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise PosterFetchError(f"Unreadable poster image from {source}: {e}") from e


class CachingPosterProvider(PosterProvider):
    """
    Memoizes another provider's results by URL, failures included.

    An export session keeps one of these per tour selection and clears
    it when the selection changes.
    """

    def __init__(self, inner: PosterProvider):
        self.inner = inner
        self._cache: Dict[str, Optional[Image.Image]] = {}
        self._lock = threading.Lock()

    def fetch(self, url: Optional[str]) -> Optional[Image.Image]:
        if not url:
            return None
        with self._lock:
            if url in self._cache:
                return self._cache[url]
        image = self.inner.fetch(url)
        with self._lock:
            self._cache.setdefault(url, image)
            return self._cache[url]

    def _load(self, url: str) -> Image.Image:
        image = self.fetch(url)
        if image is None:
            raise PosterFetchError(f"No poster available for {url}")
        return image

    def clear(self) -> None:
        """Forget every cached poster."""
        with self._lock:
            self._cache.clear()
