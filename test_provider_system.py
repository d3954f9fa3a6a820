#!/usr/bin/env python3
"""
Tests for the MangaPark provider.

The GraphQL endpoint is faked with httpx.MockTransport so every test
checks both the request the provider sends and how it maps the reply.
Runs under pytest or directly with `python test_provider_system.py`.
"""
import json
import logging
import sys
import tempfile
from pathlib import Path

import httpx

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import Config
from providers.mangapark import MangaParkProvider, SEARCH_QUERY, CHAPTERS_QUERY, PAGES_QUERY, DETAILS_QUERY

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

_config_dir = tempfile.mkdtemp()


def make_provider(handler, requests=None):
    """Build a provider whose HTTP client answers with handler(request)."""
    def transport_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(transport_handler))
    config = Config(str(Path(_config_dir) / "settings.yaml"))
    return MangaParkProvider(config=config, client=client)


def json_reply(payload, status_code=200):
    return lambda request: httpx.Response(status_code, json=payload)


def request_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


def test_search_maps_items():
    """End-to-end search with a single result item."""
    logger.info("Testing search mapping...")

    requests = []
    provider = make_provider(json_reply({
        'data': {'get_searchComic': {'items': [
            {'data': {'id': '123', 'name': 'Foo', 'urlCoverOri': '/c.jpg'}},
        ]}}
    }), requests)

    results = provider.search("Foo")

    assert [r.to_dict() for r in results] == [{
        'id': '123',
        'title': 'Foo',
        'synonyms': None,
        'image': 'https://mangapark.io/c.jpg',
        'year': None,
    }]

    assert len(requests) == 1
    request = requests[0]
    assert request.method == 'POST'
    assert str(request.url) == 'https://mangapark.io/apo/'
    assert request.headers['content-type'] == 'application/json'
    assert request.headers['referer'] == 'https://mangapark.io'
    assert 'Mozilla/5.0' in request.headers['user-agent']

    body = request_body(request)
    assert body['query'] == SEARCH_QUERY
    assert body['variables'] == {'select': {'page': 1, 'size': 24, 'word': 'Foo'}}
    logger.info("✓ Search mapping")


def test_search_field_fallbacks():
    logger.info("Testing search fallbacks...")

    requests = []
    provider = make_provider(json_reply({
        'data': {'get_searchComic': {'items': [
            {'data': {'id': 7, 'name': None, 'altNames': ['Bar', 'Baz'],
                      'urlPath': '/title/999-en-bar', 'urlCoverOri': 'https://cdn.example/x.jpg'}},
            {'data': {'urlPath': '/title/555-en-qux', 'name': 'Qux', 'urlCoverOri': 'relative/x.jpg'}},
            {'data': None},
            {},
            {'data': {'name': 'No Id'}},
        ]}}
    }), requests)

    results = provider.search(None)

    assert len(results) == 2

    assert results[0].id == '7'
    assert results[0].title == 'Unknown'
    assert results[0].synonyms == ['Bar', 'Baz']
    assert results[0].image == 'https://cdn.example/x.jpg'

    assert results[1].id == '555-en-qux'
    assert results[1].title == 'Qux'
    assert results[1].image is None

    assert request_body(requests[0])['variables']['select']['word'] is None
    logger.info("✓ Search fallbacks")


def test_search_empty_string_query_sends_null_word():
    requests = []
    provider = make_provider(json_reply({'data': {'get_searchComic': {'items': []}}}), requests)

    assert provider.search("") == []
    assert request_body(requests[0])['variables']['select']['word'] is None


def test_find_chapters_keeps_server_order():
    """Chapters keep the server's order and are indexed in it."""
    logger.info("Testing find_chapters mapping...")

    requests = []
    provider = make_provider(json_reply({
        'data': {'get_comicChapterList': [
            {'data': {
                'id': 3, 'dname': 'Vol.1 Chapter 10', 'title': None,
                'urlPath': '/title/75577-en-foo/3-ch-10',
                'dateModify': 1700000000, 'dateCreate': 1600000000,
                'userNode': {'data': {'name': 'GroupA'}}, 'srcTitle': 'Ignored',
                'dupChapters': [{'data': {'id': 99, 'dname': 'Chapter 10'}}],
            }},
            {'data': {
                'id': '2', 'dname': 'Chapter 2.50', 'title': 'The Return',
                'urlPath': '/title/75577-en-foo/2-ch-2.5',
                'dateCreate': 1600000000, 'userNode': None, 'srcTitle': 'SrcGroup',
            }},
            {'data': None},
            {'data': {'id': 5, 'dname': 'Omake', 'userNode': {'data': None}}},
        ]}
    }), requests)

    chapters = provider.find_chapters("https://mangapark.io/title/75577-en-foo")

    assert request_body(requests[0]) == {'query': CHAPTERS_QUERY, 'variables': {'id': '75577'}}

    assert [c.index for c in chapters] == [0, 1, 2]
    assert [c.id for c in chapters] == ['3', '2', '5']
    assert [c.chapter for c in chapters] == ['10', '2.5', 'Omake']

    first, second, third = chapters

    assert first.to_dict() == {
        'id': '3',
        'url': 'https://mangapark.io/title/75577-en-foo/3-ch-10',
        'title': 'Vol.1 Chapter 10',
        'chapter': '10',
        'index': 0,
        'language': None,
        'scanlator': 'GroupA',
        'updatedAt': '2023-11-14T22:13:20.000Z',
    }

    assert second.title == 'The Return'
    assert second.scanlator == 'SrcGroup'
    assert second.updated_at == '2020-09-13T12:26:40.000Z'

    assert third.title == 'Omake'
    assert third.url == ''
    assert third.scanlator is None
    assert third.updated_at is None
    logger.info("✓ find_chapters mapping")


def test_find_chapters_plain_id():
    requests = []
    provider = make_provider(json_reply({'data': {'get_comicChapterList': None}}), requests)

    assert provider.find_chapters("75577") == []
    assert request_body(requests[0])['variables'] == {'id': '75577'}


def test_find_chapter_pages_preserves_order():
    """Page indices are contiguous from 0 in server order."""
    logger.info("Testing find_chapter_pages...")

    urls = [
        'https://s01.example/z.jpg',
        '/media/a.jpg',
        'https://s01.example/m.jpg',
        'https://s01.example/b.jpg',
    ]
    requests = []
    provider = make_provider(json_reply({
        'data': {'get_chapterNode': {'data': {'imageFile': {'urlList': urls}}}}
    }), requests)

    pages = provider.find_chapter_pages("title/30068/335566#i335566")

    assert request_body(requests[0]) == {'query': PAGES_QUERY, 'variables': {'id': '335566'}}

    assert [p.index for p in pages] == list(range(len(urls)))
    assert [p.url for p in pages] == [
        'https://s01.example/z.jpg',
        'https://mangapark.io/media/a.jpg',
        'https://s01.example/m.jpg',
        'https://s01.example/b.jpg',
    ]

    for page in pages:
        assert page.headers['Referer'] == 'https://mangapark.io'
        assert 'Mozilla/5.0' in page.headers['User-Agent']

    # Each page owns its headers
    pages[0].headers['Referer'] = 'changed'
    assert pages[1].headers['Referer'] == 'https://mangapark.io'
    logger.info("✓ find_chapter_pages")


def test_find_chapter_pages_empty_fragment():
    """A trailing '#' falls back to the path; an id-less input sends nothing."""
    requests = []
    provider = make_provider(json_reply({
        'data': {'get_chapterNode': {'data': {'imageFile': {'urlList': ['https://s01.example/a.jpg']}}}}
    }), requests)

    pages = provider.find_chapter_pages("/title/30068/335566#")

    assert request_body(requests[0])['variables'] == {'id': '335566'}
    assert [p.url for p in pages] == ['https://s01.example/a.jpg']

    assert provider.find_chapter_pages("#") == []
    assert len(requests) == 1


def test_find_chapter_pages_missing_node():
    provider = make_provider(json_reply({'data': {'get_chapterNode': None}}))

    assert provider.find_chapter_pages("335566") == []


def test_http_error_returns_empty():
    """Non-2xx replies never raise out of the public operations."""
    logger.info("Testing HTTP error handling...")

    provider = make_provider(json_reply({'error': 'down'}, status_code=503))

    assert provider.search("Foo") == []
    assert provider.find_chapters("75577") == []
    assert provider.find_chapter_pages("335566") == []
    assert provider.get_manga_details("75577") is None
    logger.info("✓ HTTP errors produce empty results")


def test_transport_error_returns_empty():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(handler)

    assert provider.search("Foo") == []
    assert provider.find_chapters("75577") == []
    assert provider.find_chapter_pages("335566") == []


def test_invalid_json_returns_empty():
    provider = make_provider(lambda request: httpx.Response(200, content=b"<html>maintenance</html>"))

    assert provider.search("Foo") == []
    assert provider.find_chapters("75577") == []
    assert provider.find_chapter_pages("335566") == []


def test_graphql_errors_return_empty():
    provider = make_provider(json_reply({'errors': [{'message': 'Internal'}], 'data': None}))

    assert provider.search("Foo") == []
    assert provider.find_chapters("75577") == []
    assert provider.find_chapter_pages("335566") == []
    assert provider.get_manga_details("75577") is None


def test_get_manga_details():
    logger.info("Testing get_manga_details...")

    requests = []
    provider = make_provider(json_reply({
        'data': {'get_comicNode': {'data': {
            'id': '75577',
            'name': 'One Piece',
            'imageSet': {'data': {'main_url_200_280': '/thumb/op.jpg'}},
            'altNames': ['ワンピース'],
            'authors': ['Oda Eiichiro'],
            'artists': ['Oda Eiichiro'],
            'genreList': ['action', 'adventure'],
            'status': 'ongoing',
            'contentRating': 'safe',
            'description': 'Pirates.',
            'averageScore': 9,
        }}}
    }), requests)

    details = provider.get_manga_details("/title/75577-en-one-piece")

    assert request_body(requests[0]) == {'query': DETAILS_QUERY, 'variables': {'id': '75577'}}

    assert details is not None
    assert details.id == '75577'
    assert details.title == 'One Piece'
    assert details.image == 'https://mangapark.io/thumb/op.jpg'
    assert details.synonyms == ['ワンピース']
    assert details.genres == ['action', 'adventure']
    assert details.status == 'Ongoing'
    assert details.content_rating == 'safe'
    assert details.score == 9.0
    assert details.all_titles == ['One Piece', 'ワンピース']
    logger.info("✓ get_manga_details")


def test_string_name_fields_are_not_split():
    """A bare string in a list-valued field is a single name."""
    logger.info("Testing string-valued name fields...")

    provider = make_provider(json_reply({
        'data': {'get_searchComic': {'items': [
            {'data': {'id': '1', 'name': 'Foo', 'altNames': 'Bar'}},
            {'data': {'id': '2', 'name': 'Baz', 'altNames': ''}},
        ]}}
    }))

    results = provider.search("Foo")

    assert results[0].synonyms == ['Bar']
    assert results[1].synonyms is None

    provider = make_provider(json_reply({
        'data': {'get_comicNode': {'data': {
            'id': '1', 'name': 'Foo', 'altNames': 'Bar',
            'authors': 'Single Author', 'genreList': ['action', None],
        }}}
    }))

    details = provider.get_manga_details("1")

    assert details.synonyms == ['Bar']
    assert details.authors == ['Single Author']
    assert details.artists == []
    assert details.genres == ['action']
    logger.info("✓ String-valued name fields")


def test_get_manga_details_missing():
    provider = make_provider(json_reply({'data': {'get_comicNode': {'data': None}}}))

    assert provider.get_manga_details("1") is None


def test_settings_and_build_url():
    provider = make_provider(json_reply({}))

    assert provider.get_settings().to_dict() == {
        'supportsMultiLanguage': True,
        'supportsMultiScanlator': True,
    }
    assert provider.build_url("") == ""
    assert provider.build_url("https://x/y.png") == "https://x/y.png"
    assert provider.build_url("/covers/a.png") == "https://mangapark.io/covers/a.png"


def main():
    """Run all tests."""
    logger.info("Starting ParkBridge provider tests...")

    tests = [
        ("Search Mapping", test_search_maps_items),
        ("Search Fallbacks", test_search_field_fallbacks),
        ("Search Empty Query", test_search_empty_string_query_sends_null_word),
        ("Chapter Order", test_find_chapters_keeps_server_order),
        ("Chapter Plain ID", test_find_chapters_plain_id),
        ("Page Order", test_find_chapter_pages_preserves_order),
        ("Page Empty Fragment", test_find_chapter_pages_empty_fragment),
        ("Page Missing Node", test_find_chapter_pages_missing_node),
        ("HTTP Errors", test_http_error_returns_empty),
        ("Transport Errors", test_transport_error_returns_empty),
        ("Invalid JSON", test_invalid_json_returns_empty),
        ("GraphQL Errors", test_graphql_errors_return_empty),
        ("Manga Details", test_get_manga_details),
        ("String Name Fields", test_string_name_fields_are_not_split),
        ("Manga Details Missing", test_get_manga_details_missing),
        ("Settings", test_settings_and_build_url),
    ]

    failed = 0
    for test_name, test_func in tests:
        try:
            test_func()
            logger.info(f"✓ {test_name} PASSED")
        except AssertionError as e:
            failed += 1
            logger.error(f"✗ {test_name} FAILED: {e}")

    logger.info(f"Total: {len(tests)} tests, Failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
