"""
Module: export.assets

Purpose:
    Remote assets used by export documents (tour posters).
"""

from .poster import (
    PosterProvider,
    UrlPosterProvider,
    StaticPosterProvider,
    CachingPosterProvider,
    PosterFetchError,
    decode_poster,
)

__all__ = [
    "PosterProvider",
    "UrlPosterProvider",
    "StaticPosterProvider",
    "CachingPosterProvider",
    "PosterFetchError",
    "decode_poster",
]
