"""
Manga data models for ParkBridge.

This module contains the title-level data structures returned to the
host application: search hits and full title details.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SearchResult:
    """
    Result from search - minimal info for displaying search results.

    The id is MangaPark's opaque catalog identifier and is what
    find_chapters() expects back.
    """
    id: str
    title: str
    synonyms: Optional[List[str]] = None
    image: Optional[str] = None   # Absolute URL or None
    year: Optional[int] = None

    def __str__(self) -> str:
        """String representation for display purposes."""
        return f"[{self.id}] {self.title}"

    def to_dict(self) -> Dict[str, Any]:
        """Render the host-facing shape."""
        return {
            'id': self.id,
            'title': self.title,
            'synonyms': self.synonyms,
            'image': self.image,
            'year': self.year,
        }


@dataclass
class MangaDetails:
    """
    Detailed title information retrieved from the comic node query.
    """
    id: str
    title: str
    synonyms: List[str] = field(default_factory=list)
    image: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    artists: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    status: Optional[str] = None
    content_rating: Optional[str] = None
    description: str = ""
    score: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.title} - {self.status or 'Unknown'}"

    @property
    def all_titles(self) -> List[str]:
        """Get all titles including alternatives."""
        titles = [self.title]
        titles.extend(self.synonyms)
        return titles

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'synonyms': self.synonyms,
            'image': self.image,
            'authors': self.authors,
            'artists': self.artists,
            'genres': self.genres,
            'status': self.status,
            'contentRating': self.content_rating,
            'description': self.description,
            'score': self.score,
        }
