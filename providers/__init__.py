"""
Providers package for ParkBridge.

Each module here implements core.base_provider.BaseProvider for one
remote catalog.
"""
from .mangapark import MangaParkProvider

__all__ = ['MangaParkProvider']
