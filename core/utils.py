"""
Utility functions for ParkBridge.

This module contains the response-normalization helpers shared by the
provider: URL resolution, chapter-label parsing, timestamp conversion,
identifier extraction and tolerant nested-field access.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Union
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

VOLUME_PREFIX_RE = re.compile(r'^Vol\.\S+\s+', re.IGNORECASE)
BONUS_RE = re.compile(r'Chapter\s+Bonus', re.IGNORECASE)
CHAPTER_NUMBER_RE = re.compile(r'\b(?:Ch\.|Chapter)\s*(\d+(?:\.\d+)?)', re.IGNORECASE)
LEADING_ID_RE = re.compile(r'^(\d+)')


def build_url(path: Optional[str], base_url: str) -> str:
    """
    Build a full URL from a relative or absolute path.

    Args:
        path: Path or URL as returned by the API
        base_url: Origin to prefix root-relative paths with

    Returns:
        "" for empty input, the input unchanged when it already has a
        scheme or is not root-relative, otherwise base_url + path
    """
    if not path:
        return ""
    if path.startswith('http'):
        return path
    if path.startswith('/'):
        return f"{base_url.rstrip('/')}{path}"
    return path


def normalize_number(value: float) -> str:
    """Render a chapter number canonically: 7.0 -> "7", 1.50 -> "1.5"."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    # repr() is the shortest string that round-trips to the same float
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def parse_chapter_number(display_name: Optional[str]) -> str:
    """
    Extract a normalized chapter label from an uploader display name.

    Examples:
        "Vol.02 Chapter 003" -> "3"
        "Ch.12.50"           -> "12.5"
        "Chapter Bonus"      -> "Chapter Bonus"
        "Omake"              -> "Omake"

    This is best effort; labels are free text from many uploaders and
    nothing guarantees the result is numeric.
    """
    if not display_name:
        return ""

    remainder = VOLUME_PREFIX_RE.sub('', display_name, count=1)

    if BONUS_RE.search(remainder):
        return "Chapter Bonus"

    match = CHAPTER_NUMBER_RE.search(remainder)
    if match:
        return normalize_number(float(match.group(1)))

    return display_name


def epoch_to_iso(timestamp: Union[int, float, str, None]) -> Optional[str]:
    """
    Convert epoch seconds to an ISO-8601 UTC string with millisecond precision.

    Returns None for missing, zero or unparseable values.
    """
    if not timestamp:
        return None

    try:
        dt = datetime.fromtimestamp(float(timestamp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        logger.debug(f"Could not convert timestamp {timestamp!r}: {e}")
        return None

    return dt.strftime('%Y-%m-%dT%H:%M:%S') + f".{dt.microsecond // 1000:03d}Z"


def last_path_segment(path: str) -> str:
    """Return the last non-empty '/'-separated segment of a path."""
    segments = [s for s in path.split('/') if s]
    return segments[-1] if segments else ""


def extract_manga_id(value: str) -> str:
    """
    Reduce a title URL, path or plain id to the catalog identifier.

    "https://mangapark.io/title/75577-en-one-piece" -> "75577"
    "/title/75577-en-one-piece#chapters"            -> "75577"
    "75577"                                         -> "75577"
    """
    value = value.strip()
    if value.startswith('http'):
        value = urlparse(value).path

    value = value.split('#', 1)[0]
    if '/' in value:
        value = last_path_segment(value)

    match = LEADING_ID_RE.match(value)
    return match.group(1) if match else value


def extract_chapter_id(value: str) -> str:
    """
    Reduce a chapter URL, path or plain id to the chapter identifier.

    "/title/30068/335566#i335566"                      -> "335566"
    "https://mangapark.io/title/1-en-x/9061412-ch-1"   -> "9061412"
    "335566"                                           -> "335566"
    """
    value = value.strip()
    if value.startswith('http'):
        parsed = urlparse(value)
        value = parsed.path + (f"#{parsed.fragment}" if parsed.fragment else "")

    if '#' in value:
        value, fragment = value.split('#', 1)
        fragment_id = re.sub(r'^[a-z]', '', fragment, flags=re.IGNORECASE)
        if fragment_id:
            return fragment_id

    if '/' in value:
        value = last_path_segment(value)

    match = LEADING_ID_RE.match(value)
    return match.group(1) if match else value


def dig(obj: Any, *keys: str) -> Any:
    """
    Walk nested dicts, returning None as soon as a level is missing.

    dig(result, 'data', 'get_chapterNode', 'data') replaces a chain of
    .get() calls that would fail on a null intermediate value.
    """
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj
