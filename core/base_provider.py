"""
Base provider abstract class for ParkBridge.

This module defines the contract a catalog provider exposes to the host
reading application: search, chapter listing, page listing, title
details and a static settings descriptor.

Every public operation is total from the host's point of view: failures
are logged and turned into an empty result, never raised.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import httpx
import logging

from models import SearchResult, MangaDetails, ChapterDetails, ChapterPage, ProviderSettings

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'


class BaseProvider(ABC):
    """
    Abstract base class for catalog providers.

    Provider implementations should:
    - Set provider_id, provider_name, and base_url as class attributes
    - Implement all abstract methods
    - Return empty results instead of raising from public operations
    - Use logging instead of print statements
    """

    # Provider metadata (set in subclass)
    provider_id: str = ""        # e.g., "mangapark"
    provider_name: str = ""      # e.g., "MangaPark"
    base_url: str = ""           # e.g., "https://mangapark.io"

    def __init__(self, timeout: float = 30.0, user_agent: str = DEFAULT_USER_AGENT,
                 client: Optional[httpx.Client] = None):
        """
        Initialize the provider with an HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent sent with API requests and page fetches
            client: Pre-built client to use instead of creating one
        """
        if not self.provider_id or not self.provider_name or not self.base_url:
            raise ValueError("Provider must set provider_id, provider_name, and base_url")

        self.user_agent = user_agent
        self.session = client or httpx.Client(
            headers=self.get_headers(),
            timeout=timeout,
            follow_redirects=True
        )
        logger.info(f"Initialized provider: {self.provider_name} ({self.provider_id})")

    @abstractmethod
    def search(self, query: Optional[str]) -> List[SearchResult]:
        """
        Search the catalog by free text.

        Args:
            query: Search query string, may be None

        Returns:
            List of SearchResult objects, empty on any failure
        """
        pass

    @abstractmethod
    def find_chapters(self, manga_id: str) -> List[ChapterDetails]:
        """
        Get all chapters for a title.

        Args:
            manga_id: Catalog identifier of the title

        Returns:
            List of ChapterDetails in server order, empty on any failure
        """
        pass

    @abstractmethod
    def find_chapter_pages(self, chapter_id: str) -> List[ChapterPage]:
        """
        Get all pages for a chapter.

        Args:
            chapter_id: Chapter identifier as returned by find_chapters()

        Returns:
            List of ChapterPage objects in reading order, empty on any failure
        """
        pass

    def get_manga_details(self, manga_id: str) -> Optional[MangaDetails]:
        """
        Get detailed title information.

        Providers without a details endpoint keep this default.

        Returns:
            MangaDetails or None when unavailable
        """
        return None

    def get_settings(self) -> ProviderSettings:
        """Return the static capability descriptor."""
        return ProviderSettings()

    def get_headers(self) -> Dict[str, str]:
        """
        Return HTTP headers for requests.

        Override this method if the provider needs special headers.
        """
        return {
            'User-Agent': self.user_agent,
            'Referer': self.base_url,
        }

    def close(self):
        """Close the underlying HTTP client."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __str__(self) -> str:
        """String representation of the provider."""
        return f"{self.provider_name} ({self.provider_id})"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return f"{self.__class__.__name__}(id='{self.provider_id}', name='{self.provider_name}', url='{self.base_url}')"


# Exception classes for provider errors
class ProviderError(Exception):
    """Base exception for provider-related errors."""
    pass


class MangaNotFoundError(ProviderError):
    """Exception raised when a manga is not found."""
    pass
