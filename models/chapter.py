"""
Chapter data models for ParkBridge.

This module contains data structures for representing chapters and the
individual pages the host downloads for them.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ChapterDetails:
    """
    Chapter information for a title.

    The index is assigned by the provider from the order the server
    returned the chapter list in; it is not derived from the chapter label.
    """
    id: str               # Server-provided chapter ID
    url: str
    title: str
    chapter: str          # Normalized label: "1", "1.5", "Chapter Bonus", ...
    index: int
    language: Optional[str] = None
    scanlator: Optional[str] = None
    updated_at: Optional[str] = None   # ISO-8601, UTC

    def __str__(self) -> str:
        """String representation for display purposes."""
        group_str = f" [{self.scanlator}]" if self.scanlator else ""
        return f"Chapter {self.chapter}: {self.title}{group_str}"

    def to_dict(self) -> Dict[str, Any]:
        """Render the host-facing shape."""
        return {
            'id': self.id,
            'url': self.url,
            'title': self.title,
            'chapter': self.chapter,
            'index': self.index,
            'language': self.language,
            'scanlator': self.scanlator,
            'updatedAt': self.updated_at,
        }


@dataclass
class ChapterPage:
    """
    A single page image of a chapter.

    The headers must be sent with the image request; the image host
    rejects requests without the MangaPark referer.
    """
    url: str
    index: int
    headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'index': self.index,
            'headers': dict(self.headers),
        }
