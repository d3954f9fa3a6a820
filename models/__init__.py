"""
Models package for ParkBridge.

This package contains all data models returned by the provider.
"""
from .manga import SearchResult, MangaDetails
from .chapter import ChapterDetails, ChapterPage
from .settings import ProviderSettings

__all__ = ['SearchResult', 'MangaDetails', 'ChapterDetails', 'ChapterPage', 'ProviderSettings']
