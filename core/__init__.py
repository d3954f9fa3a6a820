"""
Core package for ParkBridge.

This package contains the provider contract, configuration and the
response-normalization helpers shared by providers.
"""
from .base_provider import BaseProvider, ProviderError, MangaNotFoundError
from .config import Config
from .utils import build_url, parse_chapter_number, epoch_to_iso, extract_manga_id, extract_chapter_id

__all__ = [
    'BaseProvider', 'ProviderError', 'MangaNotFoundError', 'Config',
    'build_url', 'parse_chapter_number', 'epoch_to_iso', 'extract_manga_id', 'extract_chapter_id',
]
