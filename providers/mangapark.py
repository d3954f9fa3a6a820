"""
MangaPark provider for ParkBridge.

This provider talks to the MangaPark GraphQL endpoint (mangapark.io/apo/)
and maps its responses onto the host's search, chapter and page models.
Each public operation issues exactly one POST and never raises; on any
failure it logs and returns an empty result.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from core.base_provider import BaseProvider, ProviderError, MangaNotFoundError
from core.config import Config
from core.utils import (
    build_url, parse_chapter_number, epoch_to_iso, extract_manga_id,
    extract_chapter_id, last_path_segment, dig,
)
from models import SearchResult, MangaDetails, ChapterDetails, ChapterPage, ProviderSettings

logger = logging.getLogger(__name__)

SEARCH_PAGE = 1
SEARCH_PAGE_SIZE = 24

SEARCH_QUERY = """
query($select: SearchComic_Select) {
  get_searchComic(select: $select) {
    items {
      data {
        id
        name
        altNames
        urlPath
        urlCoverOri
      }
    }
  }
}
"""

CHAPTERS_QUERY = """
query($id: ID!) {
  get_comicChapterList(comicId: $id) {
    data {
      id
      dname
      title
      dateCreate
      dateModify
      urlPath
      srcTitle
      userNode {
        data {
          name
        }
      }
    }
  }
}
"""

PAGES_QUERY = """
query($id: ID!) {
  get_chapterNode(id: $id) {
    data {
      imageFile {
        urlList
      }
    }
  }
}
"""

DETAILS_QUERY = """
query get_comicNode($id: ID!) {
  get_comicNode(id: $id) {
    data {
      id
      name
      imageSet {
        data {
          main_url_200_280
        }
      }
      altNames
      authors
      artists
      genreList
      status
      contentRating
      description
      averageScore
    }
  }
}
"""


class MangaParkProvider(BaseProvider):
    """
    Provider for the MangaPark GraphQL API.

    Chapters are returned in the order the server lists them and indexed
    from 0 in that order; they are not re-sorted by parsed chapter number.
    """

    provider_id = "mangapark"
    provider_name = "MangaPark"
    base_url = "https://mangapark.io"
    api_url = "https://mangapark.io/apo/"

    def __init__(self, config: Optional[Config] = None, client: Optional[httpx.Client] = None):
        """Initialize the MangaPark provider."""
        self.config = config or Config()
        super().__init__(
            timeout=self.config.network_timeout,
            user_agent=self.config.user_agent,
            client=client,
        )

    def get_headers(self) -> Dict[str, str]:
        headers = super().get_headers()
        headers['Content-Type'] = 'application/json'
        return headers

    def get_settings(self) -> ProviderSettings:
        return ProviderSettings(supports_multi_language=True, supports_multi_scanlator=True)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def build_url(self, path: Optional[str]) -> str:
        """Build a full URL from a relative or absolute path."""
        return build_url(path, self.base_url)

    def _resolve_image(self, path: Optional[str]) -> Optional[str]:
        # Cover fields that are neither absolute nor root-relative are unusable
        if path and path.startswith(('http', '/')):
            return self.build_url(path)
        return None

    @staticmethod
    def _string_list(value: Any) -> List[str]:
        # A bare string is one name, not a sequence of characters
        if isinstance(value, str):
            return [value] if value else []
        if isinstance(value, list):
            return [str(v) for v in value if v]
        return []

    def graphql_request(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a GraphQL query to the MangaPark API.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            Parsed JSON response body

        Raises:
            ProviderError: On transport errors, non-2xx status or a non-JSON body
        """
        logger.debug(f"GraphQL request to {self.api_url} with variables {variables}")

        try:
            response = self.session.post(
                self.api_url,
                json={'query': query, 'variables': variables},
                headers=self.get_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"GraphQL request failed: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ProviderError(f"GraphQL request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError(f"GraphQL response is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise ProviderError(f"Unexpected GraphQL response type: {type(body).__name__}")

        errors = body.get('errors')
        if errors:
            messages = [err.get('message', str(err)) if isinstance(err, dict) else str(err) for err in errors]
            logger.warning(f"GraphQL response contained errors: {'; '.join(messages)}")

        return body

    # ------------------------------------------------------------------
    # Provider methods
    # ------------------------------------------------------------------

    def search(self, query: Optional[str]) -> List[SearchResult]:
        """
        Search MangaPark by title.

        Only the first page (24 items) is requested.

        Args:
            query: Free-text search, may be None or empty

        Returns:
            List of SearchResult objects, empty on failure
        """
        logger.debug(f"Searching MangaPark for '{query}'")

        try:
            result = self.graphql_request(SEARCH_QUERY, {
                'select': {
                    'page': SEARCH_PAGE,
                    'size': SEARCH_PAGE_SIZE,
                    'word': query or None,
                }
            })

            items = dig(result, 'data', 'get_searchComic', 'items') or []
            results = []

            for item in items:
                data = dig(item, 'data')
                if not data:
                    continue

                manga_id = data.get('id')
                if manga_id in (None, "") and data.get('urlPath'):
                    manga_id = last_path_segment(data['urlPath'])
                if manga_id in (None, ""):
                    logger.debug(f"Skipping search item without an id: {data.get('name')}")
                    continue

                alt_names = self._string_list(data.get('altNames'))

                results.append(SearchResult(
                    id=str(manga_id),
                    title=data.get('name') or "Unknown",
                    synonyms=alt_names or None,
                    image=self._resolve_image(data.get('urlCoverOri')),
                    year=None,
                ))

            logger.info(f"MangaPark search returned {len(results)} results")
            return results

        except Exception as e:
            logger.error(f"MangaPark search failed: {e}")
            return []

    def find_chapters(self, manga_id: str) -> List[ChapterDetails]:
        """
        Get all chapters for a title.

        Args:
            manga_id: Catalog id, or a title URL/path it can be read from

        Returns:
            List of ChapterDetails in server order, empty on failure
        """
        try:
            comic_id = extract_manga_id(manga_id)
            logger.debug(f"Fetching MangaPark chapters for: {comic_id}")

            result = self.graphql_request(CHAPTERS_QUERY, {'id': comic_id})

            chapter_list = dig(result, 'data', 'get_comicChapterList') or []
            chapters = []

            for entry in chapter_list:
                data = dig(entry, 'data')
                if not data:
                    continue

                chapter_id = data.get('id')
                if chapter_id in (None, ""):
                    logger.debug(f"Skipping chapter without an id: {data.get('dname')}")
                    continue

                dname = data.get('dname') or ""
                scanlator = dig(data, 'userNode', 'data', 'name') or data.get('srcTitle') or None

                chapters.append(ChapterDetails(
                    id=str(chapter_id),
                    url=self.build_url(data.get('urlPath')),
                    title=data.get('title') or dname,
                    chapter=parse_chapter_number(dname),
                    index=len(chapters),
                    language=None,
                    scanlator=scanlator,
                    updated_at=epoch_to_iso(data.get('dateModify') or data.get('dateCreate')),
                ))

            logger.info(f"Successfully processed {len(chapters)} chapters from MangaPark")
            return chapters

        except Exception as e:
            logger.error(f"MangaPark find_chapters failed: {e}")
            return []

    def find_chapter_pages(self, chapter_id: str) -> List[ChapterPage]:
        """
        Get all page images for a chapter.

        Args:
            chapter_id: Chapter id from find_chapters(), or a chapter URL/path

        Returns:
            List of ChapterPage objects in server order, empty on failure
        """
        try:
            node_id = extract_chapter_id(chapter_id)
            if not node_id:
                logger.warning(f"No chapter id in {chapter_id!r}")
                return []
            logger.debug(f"Fetching MangaPark pages for chapter: {node_id}")

            result = self.graphql_request(PAGES_QUERY, {'id': node_id})

            url_list = dig(result, 'data', 'get_chapterNode', 'data', 'imageFile', 'urlList') or []
            headers = self.get_headers()

            pages = [
                ChapterPage(url=self.build_url(url), index=index, headers=dict(headers))
                for index, url in enumerate(url_list)
            ]

            logger.info(f"Extracted {len(pages)} pages from MangaPark chapter {node_id}")
            return pages

        except Exception as e:
            logger.error(f"MangaPark find_chapter_pages failed: {e}")
            return []

    def get_manga_details(self, manga_id: str) -> Optional[MangaDetails]:
        """
        Get detailed title information.

        Returns:
            MangaDetails, or None if the title is missing or the request fails
        """
        try:
            comic_id = extract_manga_id(manga_id)
            logger.debug(f"Fetching MangaPark details for: {comic_id}")

            result = self.graphql_request(DETAILS_QUERY, {'id': comic_id})

            node = dig(result, 'data', 'get_comicNode', 'data')
            if not node:
                raise MangaNotFoundError(f"Manga not found: {comic_id}")

            status = node.get('status')
            score = node.get('averageScore')

            details = MangaDetails(
                id=str(node.get('id') or comic_id),
                title=node.get('name') or "Unknown",
                synonyms=self._string_list(node.get('altNames')),
                image=self._resolve_image(dig(node, 'imageSet', 'data', 'main_url_200_280')),
                authors=self._string_list(node.get('authors')),
                artists=self._string_list(node.get('artists')),
                genres=self._string_list(node.get('genreList')),
                status=status.title() if isinstance(status, str) else None,
                content_rating=node.get('contentRating'),
                description=node.get('description') or "",
                score=float(score) if isinstance(score, (int, float)) else None,
            )

            logger.info(f"Extracted MangaPark manga details: {details.title}")
            return details

        except MangaNotFoundError as e:
            logger.warning(str(e))
            return None
        except Exception as e:
            logger.error(f"MangaPark get_manga_details failed: {e}")
            return None
